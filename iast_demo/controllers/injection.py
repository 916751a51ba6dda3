"""OWASP A03:2021 - Injection.

SQL, OS command and LDAP injection. ``/sql`` is the parameterized version;
the other endpoints build their queries and commands from raw input.
"""

import logging
import subprocess

from flask import Blueprint, request

from iast_demo import database
from iast_demo.controllers import database_path
from iast_demo.pages import Endpoint, Section, render_section
from iast_demo.security_controls import is_safe_command_input, is_safe_ldap_input


logger = logging.getLogger(__name__)

bp = Blueprint("injection", __name__, url_prefix="/injection")

SECTION = Section(
    title="Injection",
    owasp_id="A03:2021",
    url="/injection",
    endpoints=[
        Endpoint("POST", "/injection/sql", "Parameterized login",
                 {"username": "admin", "password": "admin123"}),
        Endpoint("POST", "/injection/sql-unsafe", "Concatenated login (try admin'--)",
                 {"username": "admin'--", "password": "x"}),
        Endpoint("POST", "/injection/command", "Ping a host (shell)",
                 {"host": "127.0.0.1"}),
        Endpoint("POST", "/injection/ldap", "Build an LDAP filter",
                 {"username": "*)(uid=*))(|(uid=*"}),
    ],
)

LDAP_FILTER_TEMPLATE = "(&(uid={username})(objectClass=person))"


def _login_message(users) -> str:
    if users:
        user = users[0]
        return f"Login successful! Welcome {user['username']} (Role: {user['role']})"
    return "Login failed!"


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/sql", methods=["POST"])
def sql():
    """Credential lookup with bind parameters."""
    username = request.form["username"]
    password = request.form["password"]

    try:
        users = database.find_users_by_credentials(username, password, database_path())
        return _login_message(users)
    except database.DatabaseError as e:
        return f"Error: {e}"


@bp.route("/sql-unsafe", methods=["POST"])
def sql_unsafe():
    """Credential lookup by string concatenation.

    Vulnerable: ``admin'--`` comments out the password check.
    """
    username = request.form["username"]
    password = request.form["password"]

    # VULNERABLE: user input concatenated into SQL
    query = database.build_credentials_query(username, password)
    try:
        users = database.run_raw_query(query, database_path())
        return _login_message(users)
    except database.DatabaseError as e:
        # VULNERABLE: SQL errors and the query are exposed
        return f"Error: {e}\nQuery: {query}"


@bp.route("/command", methods=["POST"])
def command():
    """Ping a user-supplied host through the shell.

    Vulnerable: ``127.0.0.1; cat /etc/passwd`` runs a second command.
    """
    host = request.form["host"]

    # Validation runs so the agent sees it, but the result is ignored
    if not is_safe_command_input(host):
        logger.warning("[SecurityControls] Command validation triggered for: %s", host)

    try:
        # VULNERABLE: shell=True with user input
        result = subprocess.run(
            f"ping -c 3 {host}",
            shell=True,
            capture_output=True,
            text=True,
            timeout=10
        )
        output = result.stdout + result.stderr
    except subprocess.TimeoutExpired:
        return "Error executing command: timed out"
    except OSError as e:
        return f"Error executing command: {e}"

    return f"Command output:\n{output}"


@bp.route("/ldap", methods=["POST"])
def ldap():
    """Build an LDAP filter from raw input.

    Vulnerable: ``*)(uid=*))(|(uid=*`` matches every entry.
    """
    username = request.form["username"]

    if not is_safe_ldap_input(username):
        logger.warning("[SecurityControls] LDAP validation triggered for: %s", username)

    # VULNERABLE: direct concatenation in LDAP filter
    ldap_filter = LDAP_FILTER_TEMPLATE.format(username=username)
    return (
        f"LDAP Filter (vulnerable): {ldap_filter}"
        "\nTry: *)(uid=*))(|(uid=*\nThis would bypass authentication!"
    )
