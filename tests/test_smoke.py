from types import SimpleNamespace

import pytest

import smoke

BASE = "http://testserver"


@pytest.fixture
def routed(client, monkeypatch):
    """Send the smoke checks' HTTP calls into the Flask test client."""

    def wrap(resp):
        return SimpleNamespace(status_code=resp.status_code, text=resp.get_data(as_text=True))

    def fake_get(url, params=None, timeout=None):
        return wrap(client.get(url[len(BASE):], query_string=params))

    def fake_post(url, data=None, timeout=None):
        return wrap(client.post(url[len(BASE):], data=data))

    monkeypatch.setattr(smoke.http_requests, "get", fake_get)
    monkeypatch.setattr(smoke.http_requests, "post", fake_post)


def test_all_checks_pass_against_app(routed, capsys):
    assert smoke.run_checks(BASE + "/", "omega") == 0
    out = capsys.readouterr().out
    assert out.count("[OK]") == len(smoke.CHECKS)


def test_wrong_key_fails_one_check(routed):
    assert smoke.run_checks(BASE, "nope") == 1


def test_unreachable_server(monkeypatch, capsys):
    def refuse(*args, **kwargs):
        raise smoke.http_requests.ConnectionError("connection refused")

    monkeypatch.setattr(smoke.http_requests, "get", refuse)
    monkeypatch.setattr(smoke.http_requests, "post", refuse)

    assert smoke.main(["--base-url", BASE]) == 1
    out = capsys.readouterr().out
    assert "connection refused" in out
    assert f"0/{len(smoke.CHECKS)} checks passed" in out
