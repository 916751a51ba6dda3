"""Flask blueprints, one per OWASP Top 10 category plus the secure examples.

Each controller module exposes a ``bp`` blueprint and a ``SECTION``
describing its endpoints for the index pages. Vulnerable blueprints
deliberately skip the protection their category is about; the ``secure``
blueprint shows the same operations gated by the validators and sanitizers
in :mod:`iast_demo.security_controls`.
"""

from types import ModuleType
from typing import List

from flask import current_app


def database_path() -> str:
    """Database file configured on the running app."""
    return current_app.config["DATABASE_PATH"]


def get_controllers() -> List[ModuleType]:
    """Return every controller module in registration order."""
    from iast_demo.controllers import (
        access_control,
        authentication,
        crypto,
        injection,
        integrity,
        logging_failures,
        misconfiguration,
        secure,
        ssrf,
        xss,
    )

    return [
        access_control,
        crypto,
        injection,
        misconfiguration,
        authentication,
        integrity,
        logging_failures,
        ssrf,
        xss,
        secure,
    ]
