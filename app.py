"""
PC Part Picker
==============
Classroom demo site: static files, template pages, a few echo routes,
a budget form and a key-gated admin page.

Setup:
  pip install -e .
  python app.py

Then open http://localhost:3000 in your browser.
"""

import hmac
import os
import re
import sys
import threading
import traceback
from datetime import datetime, timezone

from flask import Flask, g, request, render_template, send_from_directory
from markupsafe import escape
from werkzeug.exceptions import HTTPException
from werkzeug.security import safe_join

# ---------------------------------------------------------------------------
# CONFIG
# ---------------------------------------------------------------------------

BASE_DIR   = os.path.dirname(os.path.abspath(__file__))
PUBLIC_DIR = os.path.join(BASE_DIR, "public")
VIEWS_DIR  = os.path.join(BASE_DIR, "templates")

PORT        = int(os.environ.get("PORT", 3000))
HOST        = os.environ.get("HOST", "127.0.0.1")
ENVIRONMENT = os.environ.get("NODE_ENV", "development")
ADMIN_KEY   = os.environ.get("ADMIN_KEY", "omega")

STATIC_MAX_AGE = 24 * 60 * 60  # 1 day

PC_PARTS = [
    "Case",
    "Power Supply",
    "Motherboard",
    "CPU",
    "RAM",
    "GPU",
    "NVMe",
    "Hard Drive",
    "CPU Cooler",
    "Fans",
]

MOBILE_UA = re.compile(r"mobile", re.IGNORECASE)


def is_production():
    return ENVIRONMENT == "production"


# ---------------------------------------------------------------------------
# VISIT COUNTER
# ---------------------------------------------------------------------------

class VisitCounter:
    """Requests served since start-up. Only ever goes up."""

    def __init__(self):
        self.lock = threading.Lock()
        self.value = 0

    def increment(self):
        with self.lock:
            self.value += 1
            return self.value

visits = VisitCounter()


# ---------------------------------------------------------------------------
# FLASK APP
# ---------------------------------------------------------------------------

app = Flask(
    __name__,
    static_folder=PUBLIC_DIR,
    static_url_path="",
    template_folder=VIEWS_DIR,
)
app.config["SEND_FILE_MAX_AGE_DEFAULT"] = STATIC_MAX_AGE
# /parts/ and /list/ serve the same page as /parts and /list
app.url_map.strict_slashes = False


def device_type(user_agent):
    return "Mobile" if MOBILE_UA.search(user_agent or "") else "Desktop"


def utc_timestamp():
    """ISO-8601 with millisecond precision and a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_static_hit():
    if request.endpoint != "static":
        return False
    filename = (request.view_args or {}).get("filename", "")
    path = safe_join(PUBLIC_DIR, filename)
    return path is not None and os.path.isfile(path)


# -- Middleware ------------------------------------------------------------

@app.before_request
def count_visit():
    if _is_static_hit():
        return
    g.session_visits = visits.increment()


@app.before_request
def log_request():
    if _is_static_hit():
        return
    now = utc_timestamp()
    device = device_type(request.headers.get("User-Agent"))
    print(f"[{now}] {request.method} {request.path} — {device}")
    g.request_time = now
    g.device_type = device


@app.context_processor
def request_locals():
    return {
        "session_visits": g.get("session_visits", visits.value),
        "request_time":   g.get("request_time"),
        "device_type":    g.get("device_type"),
    }


# -- Pages -----------------------------------------------------------------

@app.route("/")
def home():
    return render_template("home.html", title="PC Part Picker")


@app.route("/parts")
def parts():
    return render_template("parts.html", page_title="PC Parts List", parts=PC_PARTS)


@app.route("/about")
def about():
    return """
    <p>This project was created by Landon Black for CST 217 💻</p>
    <img src="/PCPARTPICKER.png" alt="Example image">
  """


@app.route("/Hello")
def hello_page():
    return send_from_directory(PUBLIC_DIR, "about.html", max_age=0)


@app.route("/list")
def simple_list():
    return "<ul><li>First item</li><li>Second item</li><li>Third item</li></ul>"


# -- Echo routes -----------------------------------------------------------

@app.route("/hello/<name>")
def hello(name):
    return f"Hello, {escape(name)}! 👋"


@app.route("/part/<name>")
def part(name):
    return f"You chose the part: {escape(name)} 🖥️"


@app.route("/parts/<part_id>")
def part_details(part_id):
    return f"Details about part #{escape(part_id)} 🖥️"


# -- Budget form -----------------------------------------------------------

@app.route("/budget", methods=["POST"])
def budget():
    amount = request.form.get("budget", "")
    return f"Noted! Your budget is: {escape(amount)}! 💵"


# -- Admin -----------------------------------------------------------------

@app.route("/admin")
def admin():
    key = request.args.get("key", "")
    if not hmac.compare_digest(key.encode("utf-8"), ADMIN_KEY.encode("utf-8")):
        return "ACCESS DENIED", 401
    return render_template("admin.html", page_title="Admin")


# -- Test error ------------------------------------------------------------

@app.route("/trigger-500")
def trigger_500():
    raise RuntimeError("Intentional test error")


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------

@app.errorhandler(404)
def not_found(err):
    return render_template("404.html", page_title="Not Found", url=request.full_path.rstrip("?")), 404


@app.errorhandler(405)
def method_not_allowed(err):
    # unknown paths only match the GET-only root static rule
    adapter = app.url_map.bind_to_environ(request.environ)
    try:
        endpoint, _ = adapter.match(method="GET")
    except HTTPException:
        return err
    if endpoint == "static":
        return not_found(err)
    return err


@app.errorhandler(Exception)
def server_error(err):
    # 405, 400 and friends keep werkzeug's stock pages
    if isinstance(err, HTTPException):
        return err

    status = getattr(err, "status", 500)
    if not isinstance(status, int):
        status = 500

    print(f"[ERROR] {status} {request.method} {request.full_path.rstrip('?')} {err}", file=sys.stderr)

    if is_production():
        message, stack = "Something went wrong.", None
    else:
        message = str(err) or "Error"
        stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))

    return render_template("500.html", page_title="Server Error", message=message, stack=stack), status


# ---------------------------------------------------------------------------

if __name__ == "__main__":
    print("\n🖥️  PC Part Picker")
    print(f"   Mode: {ENVIRONMENT.upper()}")
    print(f"Server running at http://localhost:{PORT}\n")
    app.run(host=HOST, port=PORT, debug=not is_production())
