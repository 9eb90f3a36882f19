"""
Smoke check — run this against a running PC Part Picker server.
  python app.py            (in one terminal)
  python smoke.py          (in another)

Pass --base-url / --key to point it somewhere else.
"""

import argparse
import os
import sys

import requests as http_requests

TIMEOUT = 5


def check_part_details(base_url, key):
    resp = http_requests.get(f"{base_url}/parts/42", timeout=TIMEOUT)
    return resp.status_code == 200 and "42" in resp.text


def check_admin_denied(base_url, key):
    resp = http_requests.get(f"{base_url}/admin", timeout=TIMEOUT)
    return resp.status_code == 401


def check_admin_allowed(base_url, key):
    resp = http_requests.get(f"{base_url}/admin", params={"key": key}, timeout=TIMEOUT)
    return resp.status_code == 200


def check_not_found(base_url, key):
    resp = http_requests.get(f"{base_url}/does-not-exist", timeout=TIMEOUT)
    return resp.status_code == 404


def check_server_error(base_url, key):
    resp = http_requests.get(f"{base_url}/trigger-500", timeout=TIMEOUT)
    return resp.status_code == 500


def check_budget(base_url, key):
    resp = http_requests.post(f"{base_url}/budget", data={"budget": "1500"}, timeout=TIMEOUT)
    return resp.status_code == 200 and "1500" in resp.text


CHECKS = [
    ("GET /parts/42 echoes the id",         check_part_details),
    ("GET /admin without key is denied",    check_admin_denied),
    ("GET /admin with key is allowed",      check_admin_allowed),
    ("GET unknown path is 404",             check_not_found),
    ("GET /trigger-500 is 500",             check_server_error),
    ("POST /budget echoes the budget",      check_budget),
]


def run_checks(base_url, key):
    """Run every check, print one line each. Returns the number of failures."""
    base_url = base_url.rstrip("/")
    failures = 0
    for label, check in CHECKS:
        try:
            ok = check(base_url, key)
        except http_requests.RequestException as e:
            print(f"[FAIL] {label} — {e}")
            failures += 1
            continue
        print(f"[{'OK' if ok else 'FAIL'}] {label}")
        if not ok:
            failures += 1
    return failures


def main(argv=None):
    port = os.environ.get("PORT", "3000")
    parser = argparse.ArgumentParser(description="Smoke-test a running PC Part Picker server.")
    parser.add_argument("--base-url", default=f"http://127.0.0.1:{port}")
    parser.add_argument("--key", default=os.environ.get("ADMIN_KEY", "omega"))
    args = parser.parse_args(argv)

    print(f"\n=== SMOKE CHECK: {args.base_url} ===")
    failures = run_checks(args.base_url, args.key)
    print(f"\n{len(CHECKS) - failures}/{len(CHECKS)} checks passed\n")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
