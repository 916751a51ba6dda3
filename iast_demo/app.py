"""Flask application factory for the OWASP Top 10 IAST demo.

This application intentionally contains OWASP Top 10 vulnerabilities for
exercising an IAST agent. DO NOT deploy in production!

Categories covered:
- A01 Broken Access Control
- A02 Cryptographic Failures
- A03 Injection (SQL, OS command, LDAP, XSS)
- A05 Security Misconfiguration
- A07 Identification and Authentication Failures
- A08 Software and Data Integrity Failures (pickle)
- A09 Security Logging and Monitoring Failures
- A10 Server-Side Request Forgery (plus XXE)

Run with ``python main.py serve`` or ``flask --app iast_demo.app run``.
"""

import logging
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify

from iast_demo.config import get_flask_config
from iast_demo.controllers import get_controllers
from iast_demo.database import init_db, reset_db
from iast_demo.pages import Section, render_home


logger = logging.getLogger(__name__)


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the demo application.

    Args:
        overrides: Values replacing the environment-derived settings, e.g.
                   ``{"DATABASE_PATH": "/tmp/test.db"}``.

    Returns:
        Configured Flask app with all blueprints registered and the
        database initialized.
    """
    app = Flask(__name__)
    app.config.update(get_flask_config())
    if overrides:
        app.config.update(overrides)

    sections = []
    for controller in get_controllers():
        app.register_blueprint(controller.bp)
        sections.append(controller.SECTION)

    # Initialize database on creation to support every run mode
    init_db(app.config["DATABASE_PATH"])

    _register_utility_routes(app, sections)

    logger.debug("Registered %d controllers", len(sections))
    return app


def _register_utility_routes(app: Flask, sections: List[Section]) -> None:
    @app.route("/")
    def home():
        """Home page with navigation to all endpoints."""
        return render_home(sections)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "message": "IAST demo app is running"})

    @app.route("/reset")
    def reset():
        """Reset database to initial state."""
        reset_db(app.config["DATABASE_PATH"])
        return jsonify({"status": "ok", "message": "Database reset to initial state"})
