"""OWASP A05:2021 - Security Misconfiguration.

Verbose errors, directory listing, default credentials, exposed debug info
and TRACE/OPTIONS left enabled.
"""

import getpass
import os
import platform
import sys
import traceback

from flask import Blueprint, request

from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("misconfiguration", __name__, url_prefix="/config")

SECTION = Section(
    title="Security Misconfiguration",
    owasp_id="A05:2021",
    url="/config",
    endpoints=[
        Endpoint("GET", "/config/error-test?input=abc", "Stack trace in response"),
        Endpoint("GET", "/config/list-files?path=/", "Directory listing"),
        Endpoint("GET", "/config/admin-panel?user=admin&pass=admin", "Default credentials"),
        Endpoint("GET", "/config/debug", "Debug info exposed"),
        Endpoint("OPTIONS", "/config/resource", "TRACE and OPTIONS enabled"),
    ],
)

DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASS = "admin"


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/error-test")
def error_test():
    value = request.args["input"]
    try:
        return f"Parsed: {int(value)}"
    except ValueError:
        # VULNERABLE: full stack trace returned to the client
        return f"ERROR (with full stack trace):\n{traceback.format_exc()}"


@bp.route("/list-files")
def list_files():
    path = request.args["path"]

    # VULNERABLE: lists any directory on the server
    lines = [f"Files in {path}:", ""]
    if os.path.isdir(path):
        try:
            lines.extend(sorted(os.listdir(path)))
        except OSError as e:
            lines.append(f"Error: {e}")
    return "\n".join(lines) + "\n"


@bp.route("/admin-panel")
def admin_panel():
    # VULNERABLE: default credentials still active
    if (request.args.get("user") == DEFAULT_ADMIN_USER
            and request.args.get("pass") == DEFAULT_ADMIN_PASS):
        return "Admin access granted!\nDefault credentials still active!"
    return "Login required (try admin/admin)"


@bp.route("/debug")
def debug_info():
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"

    # VULNERABLE: runtime details exposed
    return (
        "DEBUG INFO:\n"
        f"Python Version: {platform.python_version()}\n"
        f"OS: {platform.system()} {platform.release()}\n"
        f"User: {user}\n"
        f"Home: {os.path.expanduser('~')}\n"
        f"Path: {os.pathsep.join(sys.path)}\n"
        "\nThis should not be exposed in production!"
    )


@bp.route("/resource", methods=["TRACE", "OPTIONS"])
def unsafe_methods():
    # VULNERABLE: TRACE can leak cookies
    return "TRACE and OPTIONS methods enabled (security risk!)"
