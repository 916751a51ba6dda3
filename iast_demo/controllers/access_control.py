"""OWASP A01:2021 - Broken Access Control.

IDOR, missing function-level checks, horizontal privilege escalation and
unrestricted file lookup. No endpoint looks at who is asking.
"""

import os

from flask import Blueprint, request

from iast_demo import database
from iast_demo.controllers import database_path
from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("access_control", __name__, url_prefix="/access-control")

SECTION = Section(
    title="Broken Access Control",
    owasp_id="A01:2021",
    url="/access-control",
    endpoints=[
        Endpoint("GET", "/access-control/profile/1", "View any profile (IDOR)"),
        Endpoint("POST", "/access-control/admin/delete-user/3", "Delete a user without a role check"),
        Endpoint("POST", "/access-control/update-email", "Change another user's email",
                 {"userId": "1", "email": "attacker@example.com"}),
        Endpoint("GET", "/access-control/download?filename=/etc/hostname", "Look up any file"),
    ],
)


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/profile/<int:user_id>")
def profile(user_id):
    """Insecure direct object reference: any id is viewable."""
    # VULNERABLE: no authorization check
    user = database.find_user_by_id(user_id, database_path())
    if user is None:
        return "<html><body><h2>User not found</h2></body></html>", 404

    return f'''
    <html>
    <head><title>Profile</title></head>
    <body>
    <h1>Profile</h1>
    <p>Viewing profile for user ID: {user_id}</p>
    <table border="1">
        <tr><th>Username</th><td>{user['username']}</td></tr>
        <tr><th>Email</th><td>{user['email']}</td></tr>
        <tr><th>Role</th><td>{user['role']}</td></tr>
        <tr><th>Password</th><td>{user['password']}</td></tr>
    </table>
    <p><a href="/access-control">Back</a></p>
    </body>
    </html>
    '''


@bp.route("/admin/delete-user/<int:user_id>", methods=["POST"])
def delete_user(user_id):
    # VULNERABLE: no admin role check
    try:
        database.delete_user(user_id, database_path())
    except database.DatabaseError as e:
        return f"Error deleting user: {e}"
    return f"User {user_id} deleted successfully!"


@bp.route("/update-email", methods=["POST"])
def update_email():
    """Horizontal privilege escalation: the caller picks the user id."""
    user_id = request.form.get("userId", type=int)
    email = request.form["email"]
    if user_id is None:
        return "Error: userId must be a number", 400

    # VULNERABLE: no check that userId belongs to the caller
    if database.update_user_email(user_id, email, database_path()):
        return f"Email updated for user {user_id}"
    return "User not found"


@bp.route("/download")
def download():
    """Report on any file the server can see.

    Example payload: ../../etc/passwd
    """
    filename = request.args["filename"]

    # VULNERABLE: no path validation
    try:
        if os.path.exists(filename):
            return (
                f"File found: {os.path.abspath(filename)}"
                f"\nSize: {os.path.getsize(filename)} bytes"
            )
        return f"File not found: {filename}"
    except OSError as e:
        return f"Error: {e}"
