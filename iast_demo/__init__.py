"""Intentionally vulnerable OWASP Top 10 demo for exercising IAST agents.

This package provides:
- security_controls: validators and sanitizers used by the secure endpoints
- controls_registry: named catalogue of those controls
- create_app: Flask application with one blueprint per OWASP category
- Configuration management for the demo

Example:
    >>> from iast_demo import sanitize_html_output, is_safe_url
    >>> sanitize_html_output("<b>")
    '&lt;b&gt;'
    >>> is_safe_url("javascript:alert(1)")
    False
"""

__version__ = "0.1.0"

from iast_demo.config import configure_logging, get_config_summary
from iast_demo.controls_registry import (
    ControlKind,
    ControlRegistryError,
    InvalidControlKindError,
    SecurityControl,
    SECURITY_CONTROLS,
    UnknownControlError,
    describe_controls,
    get_control,
    list_controls,
)
from iast_demo.security_controls import (
    is_numeric,
    is_safe_command_input,
    is_safe_html_input,
    is_safe_ldap_input,
    is_safe_path,
    is_safe_sql_input,
    is_safe_text_pattern,
    is_safe_url,
    is_safe_username,
    is_valid_email,
    is_valid_host,
    sanitize_command_input,
    sanitize_html_output,
    sanitize_ldap_input,
    sanitize_path,
    sanitize_sql_input,
    strip_html_tags,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "configure_logging",
    "get_config_summary",
    # Control registry
    "ControlKind",
    "ControlRegistryError",
    "InvalidControlKindError",
    "SecurityControl",
    "SECURITY_CONTROLS",
    "UnknownControlError",
    "describe_controls",
    "get_control",
    "list_controls",
    # SQL injection
    "is_safe_sql_input",
    "is_safe_username",
    "is_numeric",
    "sanitize_sql_input",
    # XSS
    "is_safe_html_input",
    "is_safe_text_pattern",
    "sanitize_html_output",
    "strip_html_tags",
    # Command injection
    "is_safe_command_input",
    "is_valid_host",
    "sanitize_command_input",
    # Path traversal
    "is_safe_path",
    "sanitize_path",
    # LDAP injection
    "is_safe_ldap_input",
    "sanitize_ldap_input",
    # Email and URL
    "is_valid_email",
    "is_safe_url",
]
