"""OWASP A07:2021 - Identification and Authentication Failures.

Brute-forceable login, no password policy, session fixation, predictable
reset tokens and username enumeration.
"""

import time

from flask import Blueprint, request, session

from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("authentication", __name__, url_prefix="/auth")

SECTION = Section(
    title="Authentication Failures",
    owasp_id="A07:2021",
    url="/auth",
    endpoints=[
        Endpoint("POST", "/auth/login", "No rate limiting",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/auth/register", "No password policy",
                 {"username": "bob", "password": "1", "email": "bob@example.com"}),
        Endpoint("POST", "/auth/session-login", "Session fixation",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/auth/forgot-password", "Predictable reset token",
                 {"email": "admin@example.com"}),
        Endpoint("POST", "/auth/check-username", "Username enumeration",
                 {"username": "admin"}),
    ],
)

# VULNERABLE: hardcoded credentials
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

KNOWN_USERNAMES = {"admin", "user"}


def _is_admin(username: str, password: str) -> bool:
    return username == ADMIN_USERNAME and password == ADMIN_PASSWORD


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/login", methods=["POST"])
def login():
    # VULNERABLE: no rate limiting, no account lockout
    if _is_admin(request.form["username"], request.form["password"]):
        return "Login successful!"
    return "Login failed! (No rate limiting - try brute force)"


@bp.route("/register", methods=["POST"])
def register():
    username = request.form["username"]
    password = request.form["password"]
    email = request.form["email"]

    # VULNERABLE: no password strength requirements
    return (
        "User registered successfully!\n"
        f"Username: {username}\n"
        f"Password: {password} (stored in plain text!)\n"
        f"Email: {email}"
    )


@bp.route("/session-login", methods=["POST"])
def session_login():
    """Log in without rotating the session."""
    if not _is_admin(request.form["username"], request.form["password"]):
        return "Login failed!"

    # VULNERABLE: existing session reused after authentication
    session["user"] = ADMIN_USERNAME
    session["role"] = "admin"
    session_id = session.setdefault("session_id", str(time.time_ns()))
    return (
        f"Logged in! Session ID: {session_id}"
        "\n(Session ID should be regenerated after login)"
    )


@bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    email = request.form["email"]

    # VULNERABLE: token is the current time in milliseconds
    reset_token = str(int(time.time() * 1000))
    return (
        f"Password reset link sent to: {email}"
        f"\nReset token: {reset_token}"
        "\n(Token is predictable and based on timestamp!)"
    )


@bp.route("/check-username", methods=["POST"])
def check_username():
    # VULNERABLE: different answers reveal which accounts exist
    if request.form["username"] in KNOWN_USERNAMES:
        return "Username already exists!"
    return "Username available!"
