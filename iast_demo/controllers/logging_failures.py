"""OWASP A09:2021 - Security Logging and Monitoring Failures.

Log injection, secrets in logs, and critical actions that leave no trace.
"""

import logging

from flask import Blueprint, request

from iast_demo.pages import Endpoint, Section, render_section


logger = logging.getLogger(__name__)

bp = Blueprint("logging_failures", __name__, url_prefix="/logging")

SECTION = Section(
    title="Logging Failures",
    owasp_id="A09:2021",
    url="/logging",
    endpoints=[
        Endpoint("POST", "/logging/login-attempt", "Log injection and password in logs",
                 {"username": "admin\nSUCCESS: Admin logged in", "password": "secret"}),
        Endpoint("POST", "/logging/delete-account", "No audit trail",
                 {"userId": "2"}),
        Endpoint("POST", "/logging/process-payment", "Card data in logs",
                 {"cardNumber": "4532123456789010", "cvv": "123", "amount": "10.00"}),
        Endpoint("POST", "/logging/check-login", "Failed logins not monitored",
                 {"username": "admin"}),
    ],
)


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/login-attempt", methods=["POST"])
def login_attempt():
    username = request.form["username"]
    password = request.form["password"]

    # VULNERABLE: raw input (newlines included) and the password go to the log
    log_entry = f"Login attempt - Username: {username}, Password: {password}"
    logger.info(log_entry)

    return (
        f"Login attempt logged (INSECURE - passwords in logs!):\n{log_entry}"
        "\n\nTry username: admin\\nSUCCESS: Admin logged in"
    )


@bp.route("/delete-account", methods=["POST"])
def delete_account():
    # VULNERABLE: critical action not logged
    return f"Account {request.form['userId']} deleted!\nNo audit trail created!"


@bp.route("/process-payment", methods=["POST"])
def process_payment():
    card_number = request.form["cardNumber"]
    cvv = request.form["cvv"]
    amount = request.form["amount"]

    # VULNERABLE: sensitive data logged
    log_message = f"Payment processed - Card: {card_number}, CVV: {cvv}, Amount: {amount}"
    logger.info(log_message)

    return f"Payment processed!\nLogged (INSECURE): {log_message}"


@bp.route("/check-login", methods=["POST"])
def check_login():
    # VULNERABLE: failed attempts neither counted nor alerted
    return f"Login check for: {request.form['username']}\nFailed attempts not monitored!"
