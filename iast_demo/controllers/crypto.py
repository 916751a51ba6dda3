"""OWASP A02:2021 - Cryptographic Failures.

MD5 password hashing, hardcoded secrets, plaintext sensitive data and
non-cryptographic token generation.
"""

import base64
import hashlib
import json
import random

from flask import Blueprint, Response, request

from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("crypto", __name__, url_prefix="/crypto")

SECTION = Section(
    title="Cryptographic Failures",
    owasp_id="A02:2021",
    url="/crypto",
    endpoints=[
        Endpoint("POST", "/crypto/hash-password", "MD5 password hashing",
                 {"password": "secret"}),
        Endpoint("GET", "/crypto/get-api-key", "Hardcoded credentials"),
        Endpoint("GET", "/crypto/user-details?userId=1", "Sensitive data in plain text"),
        Endpoint("GET", "/crypto/generate-token", "Insecure random token"),
    ],
)

# VULNERABLE: hardcoded secrets
API_KEY = "sk-1234567890abcdef1234567890abcdef"
DB_PASSWORD = "SuperSecret123!"


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/hash-password", methods=["POST"])
def hash_password():
    password = request.form["password"]

    # VULNERABLE: MD5 is cryptographically broken
    digest = hashlib.md5(password.encode("utf-8")).digest()
    hashed = base64.b64encode(digest).decode("ascii")
    return f"Password hashed with MD5 (INSECURE):\n{hashed}"


@bp.route("/get-api-key")
def get_api_key():
    return (
        f"API Key: {API_KEY}\nDB Password: {DB_PASSWORD}"
        "\n\nThese should never be hardcoded!"
    )


@bp.route("/user-details")
def user_details():
    user_id = request.args["userId"]

    # VULNERABLE: sensitive data sent in plain text
    details = {
        "userId": user_id,
        "ssn": "123-45-6789",
        "creditCard": "4532-1234-5678-9010",
        "password": "plainTextPassword123",
    }
    return Response(json.dumps(details, indent=2), mimetype="application/json")


@bp.route("/generate-token")
def generate_token():
    # VULNERABLE: random.random() is not cryptographically secure
    token = str(random.random())[2:]
    return (
        f"Generated token (INSECURE): {token}"
        "\n\nUse the secrets module for security-sensitive tokens!"
    )
