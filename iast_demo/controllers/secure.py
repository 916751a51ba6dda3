"""Remediated counterparts of the injection, XSS and path endpoints.

Each endpoint passes its input through the validators and sanitizers in
:mod:`iast_demo.security_controls` before it reaches a query, a command, an
LDAP filter or an HTML fragment. Once those functions are registered with an
IAST agent (see ``/secure/controls``) the agent treats the values as safe and
stops reporting the flows.

The SQL endpoints still concatenate on purpose: the point is to show the
agent trusting a registered control, not to replace bind parameters.
"""

import logging
import os
import subprocess

from flask import Blueprint, current_app, jsonify, request

from iast_demo import database
from iast_demo.controllers import database_path
from iast_demo.controllers.injection import LDAP_FILTER_TEMPLATE
from iast_demo.controls_registry import (
    VALID_KINDS,
    InvalidControlKindError,
    describe_controls,
)
from iast_demo.pages import Endpoint, Section, render_section
from iast_demo.security_controls import (
    is_safe_command_input,
    is_safe_html_input,
    is_safe_ldap_input,
    is_safe_path,
    is_safe_sql_input,
    is_safe_url,
    is_safe_username,
    is_valid_email,
    is_valid_host,
    sanitize_html_output,
    sanitize_ldap_input,
    sanitize_path,
    sanitize_sql_input,
    strip_html_tags,
)


logger = logging.getLogger(__name__)

bp = Blueprint("secure", __name__, url_prefix="/secure")

SECTION = Section(
    title="Secure Implementations",
    url="/secure",
    endpoints=[
        Endpoint("POST", "/secure/sql-validated", "SQL with validation",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/secure/sql-sanitized", "SQL with sanitization",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/secure/sql-secure", "SQL with validation and sanitization",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/secure/xss-validated", "HTML output with validation",
                 {"comment": "Hello"}),
        Endpoint("POST", "/secure/xss-sanitized", "HTML output with encoding",
                 {"comment": "<b>Hello</b>"}),
        Endpoint("POST", "/secure/xss-stripped", "HTML output with tag stripping",
                 {"comment": "<b>Hello</b>"}),
        Endpoint("POST", "/secure/command-validated", "Ping with host validation",
                 {"host": "127.0.0.1"}),
        Endpoint("POST", "/secure/ldap-validated", "LDAP filter with validation",
                 {"username": "john"}),
        Endpoint("POST", "/secure/ldap-sanitized", "LDAP filter with escaping",
                 {"username": "*"}),
        Endpoint("POST", "/secure/email-validated", "Email validation",
                 {"email": "user@example.com"}),
        Endpoint("POST", "/secure/url-validated", "URL scheme allow-list",
                 {"url": "https://example.com"}),
        Endpoint("GET", "/secure/download?filename=readme.txt", "File lookup with path validation"),
        Endpoint("GET", "/secure/controls", "Registered security controls"),
    ],
)


def _comment_page(comment: str) -> str:
    return (
        "<html><body>"
        "<h2>Comment Posted:</h2>"
        f"<div>{comment}</div>"
        "</body></html>"
    )


def _login(username: str, password: str) -> str:
    query = database.build_credentials_query(username, password)
    try:
        users = database.run_raw_query(query, database_path())
    except database.DatabaseError:
        logger.exception("Credential lookup failed")
        return "Error: login could not be processed"

    if users:
        return f"Login successful! Welcome {users[0]['username']}"
    return "Login failed!"


@bp.route("")
def index():
    return render_section(SECTION)


# =============================================================================
# SQL INJECTION
# =============================================================================

@bp.route("/sql-validated", methods=["POST"])
def sql_validated():
    username = request.form["username"]
    password = request.form["password"]

    if not is_safe_sql_input(username) or not is_safe_sql_input(password):
        return "Error: Invalid input detected. Only alphanumeric characters allowed."

    return _login(username, password)


@bp.route("/sql-sanitized", methods=["POST"])
def sql_sanitized():
    username = sanitize_sql_input(request.form["username"])
    password = sanitize_sql_input(request.form["password"])
    return _login(username, password)


@bp.route("/sql-secure", methods=["POST"])
def sql_secure():
    """Validate the username strictly, fall back to sanitizing it."""
    username = request.form["username"]

    if not is_safe_username(username):
        if not is_safe_sql_input(username):
            return "Error: Invalid username format"
        username = sanitize_sql_input(username)

    return _login(username, sanitize_sql_input(request.form["password"]))


# =============================================================================
# CROSS-SITE SCRIPTING
# =============================================================================

@bp.route("/xss-validated", methods=["POST"])
def xss_validated():
    comment = request.form["comment"]
    if not is_safe_html_input(comment):
        return "Error: HTML tags and scripts are not allowed"
    return _comment_page(comment)


@bp.route("/xss-sanitized", methods=["POST"])
def xss_sanitized():
    return _comment_page(sanitize_html_output(request.form["comment"]))


@bp.route("/xss-stripped", methods=["POST"])
def xss_stripped():
    return _comment_page(strip_html_tags(request.form["comment"]))


# =============================================================================
# COMMAND INJECTION
# =============================================================================

@bp.route("/command-validated", methods=["POST"])
def command_validated():
    host = request.form["host"]

    if not is_valid_host(host):
        return "Error: Invalid hostname format"
    if not is_safe_command_input(host):
        return "Error: Dangerous characters detected"

    try:
        result = subprocess.run(
            ["ping", "-c", "3", host],
            capture_output=True,
            text=True,
            timeout=10
        )
    except subprocess.TimeoutExpired:
        return "Error: command timed out"
    except OSError as e:
        logger.error("Ping failed: %s", e)
        return "Error: command could not be run"

    return f"Command output:\n{result.stdout}"


# =============================================================================
# LDAP INJECTION
# =============================================================================

@bp.route("/ldap-validated", methods=["POST"])
def ldap_validated():
    username = request.form["username"]
    if not is_safe_ldap_input(username):
        return "Error: Invalid characters for LDAP query"
    return f"LDAP Filter (validated): {LDAP_FILTER_TEMPLATE.format(username=username)}"


@bp.route("/ldap-sanitized", methods=["POST"])
def ldap_sanitized():
    username = sanitize_ldap_input(request.form["username"])
    return f"LDAP Filter (sanitized): {LDAP_FILTER_TEMPLATE.format(username=username)}"


# =============================================================================
# EMAIL, URL AND PATH
# =============================================================================

@bp.route("/email-validated", methods=["POST"])
def email_validated():
    email = request.form["email"]
    if not is_valid_email(email):
        return "Error: Invalid email format"
    return f"Email validated successfully: {email}"


@bp.route("/url-validated", methods=["POST"])
def url_validated():
    url = request.form["url"]
    if not is_safe_url(url):
        return "Error: Only http:// and https:// URLs are allowed"
    return f"URL validated successfully: {url}"


@bp.route("/download")
def download():
    """Look up a file inside the configured files directory only."""
    filename = request.args["filename"]
    if not is_safe_path(filename):
        return "Error: Invalid file path"

    relative = sanitize_path(filename)
    full_path = os.path.join(current_app.config["FILES_DIR"], relative)
    if not os.path.isfile(full_path):
        return f"File not found: {relative}", 404
    return f"File found: {relative}\nSize: {os.path.getsize(full_path)} bytes"


# =============================================================================
# CONTROL CATALOGUE
# =============================================================================

@bp.route("/controls")
def controls():
    """List registered controls, filterable by ``kind`` and ``category``."""
    kind = request.args.get("kind")
    try:
        described = describe_controls(kind=kind, category=request.args.get("category"))
    except InvalidControlKindError:
        return jsonify({
            "error": f"Invalid kind '{kind}'",
            "valid_kinds": sorted(VALID_KINDS),
        }), 400

    return jsonify(described)
