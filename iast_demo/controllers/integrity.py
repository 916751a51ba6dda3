"""OWASP A08:2021 - Software and Data Integrity Failures.

Untrusted pickle deserialization, unchecked JSON input, unverified uploads
and unsigned updates.
"""

import base64
import json
import os
import pickle

from flask import Blueprint, current_app, request

from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("integrity", __name__, url_prefix="/integrity")

SAMPLE_OBJECT = {"user": "demo", "role": "guest"}

SECTION = Section(
    title="Integrity Failures",
    owasp_id="A08:2021",
    url="/integrity",
    endpoints=[
        Endpoint("POST", "/integrity/deserialize", "Pickle deserialization",
                 {"data": base64.b64encode(pickle.dumps(SAMPLE_OBJECT)).decode("ascii")}),
        Endpoint("POST", "/integrity/json-deserialize", "Unchecked JSON",
                 {"json": '{"role": "admin"}'}),
        Endpoint("POST", "/integrity/upload", "Upload without integrity check",
                 {"filename": "notes.txt", "content": "hello"}),
        Endpoint("POST", "/integrity/update", "Unsigned software update",
                 {"updateUrl": "http://updates.example.com/pkg.tar.gz"}),
    ],
)


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/deserialize", methods=["POST"])
def deserialize():
    """Unpickle base64 data from the request.

    Vulnerable: a crafted pickle runs arbitrary code on load.
    """
    data = request.form["data"]

    try:
        # VULNERABLE: deserializing untrusted data
        obj = pickle.loads(base64.b64decode(data))
    except Exception as e:
        return f"Error deserializing: {e}"

    return (
        f"Deserialized object: {obj}"
        "\n\nThis is vulnerable to remote code execution!"
    )


@bp.route("/json-deserialize", methods=["POST"])
def json_deserialize():
    """Parse JSON and trust whatever structure comes back."""
    try:
        obj = json.loads(request.form["json"])
    except json.JSONDecodeError as e:
        return f"Error: {e}"
    return f"JSON parsed: {obj}"


@bp.route("/upload", methods=["POST"])
def upload():
    filename = request.form["filename"]
    content = request.form["content"]

    # VULNERABLE: filename not validated, content not verified
    path = os.path.join(current_app.config["UPLOAD_DIR"], filename)
    try:
        with open(path, "w") as f:
            f.write(content)
    except OSError as e:
        return f"Error: {e}"

    return (
        f"File uploaded: {os.path.abspath(path)}"
        "\n\nNo integrity check performed!"
    )


@bp.route("/update", methods=["POST"])
def install_update():
    update_url = request.form["updateUrl"]

    # VULNERABLE: no signature verification
    return (
        f"Installing update from: {update_url}"
        "\n\nWARNING: No signature verification!"
        "\nAn attacker could supply a malicious update!"
    )
