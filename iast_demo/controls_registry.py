"""Catalogue of the security controls exposed by :mod:`iast_demo.security_controls`.

IAST agents need to be told which application methods act as validators or
sanitizers. This module keeps that list in one place so the CLI and the
``/secure/controls`` endpoint can look controls up by name and describe them.

Example:
    >>> from iast_demo.controls_registry import get_control
    >>> control = get_control("sanitize_ldap_input")
    >>> control.kind
    <ControlKind.SANITIZER: 'sanitizer'>
    >>> control.apply("*")
    '\\\\2a'
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from iast_demo import security_controls


logger = logging.getLogger(__name__)


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================

class ControlRegistryError(Exception):
    """Base exception for control registry errors."""
    pass


class UnknownControlError(ControlRegistryError):
    """Raised when a control name is not registered."""
    pass


class InvalidControlKindError(ControlRegistryError):
    """Raised when a kind filter is not a ControlKind value."""
    pass


# =============================================================================
# CONTROL DEFINITIONS
# =============================================================================

class ControlKind(Enum):
    """Whether a control returns a verdict or a transformed value."""
    VALIDATOR = "validator"
    SANITIZER = "sanitizer"


VALID_KINDS = {kind.value for kind in ControlKind}


@dataclass(frozen=True)
class SecurityControl:
    """A named validator or sanitizer.

    Attributes:
        name: Function name in :mod:`iast_demo.security_controls`.
        kind: Validator or sanitizer.
        category: Vulnerability class the control guards against.
        function: The callable itself.
        description: One-line summary for listings.
    """
    name: str
    kind: ControlKind
    category: str
    function: Callable[[Optional[str]], Union[bool, Optional[str]]]
    description: str

    @property
    def signature(self) -> str:
        """Fully qualified name used when registering the control with an agent."""
        return f"{self.function.__module__}.{self.name}(str)"

    def apply(self, value: Optional[str]) -> Union[bool, Optional[str]]:
        """Run the control against ``value``."""
        return self.function(value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "category": self.category,
            "signature": self.signature,
            "description": self.description,
        }


def _control(
    function: Callable,
    kind: ControlKind,
    category: str,
    description: str,
) -> SecurityControl:
    return SecurityControl(
        name=function.__name__,
        kind=kind,
        category=category,
        function=function,
        description=description,
    )


_V = ControlKind.VALIDATOR
_S = ControlKind.SANITIZER

_CONTROLS: List[SecurityControl] = [
    # SQL injection
    _control(security_controls.is_safe_sql_input, _V, "sql",
             "Only letters, digits and _ - . @"),
    _control(security_controls.is_safe_username, _V, "sql",
             "3-20 letters, digits or underscores"),
    _control(security_controls.is_numeric, _V, "sql",
             "Signed 64-bit integer"),
    _control(security_controls.sanitize_sql_input, _S, "sql",
             "Double quotes and backslashes, drop comment and statement tokens"),
    # Cross-site scripting
    _control(security_controls.is_safe_html_input, _V, "xss",
             "No angle brackets or script vectors"),
    _control(security_controls.is_safe_text_pattern, _V, "xss",
             "Letters, digits, space and . , ! ? - @"),
    _control(security_controls.sanitize_html_output, _S, "xss",
             "HTML-encode & < > \" ' /"),
    _control(security_controls.strip_html_tags, _S, "xss",
             "Remove <...> tags"),
    # Command injection
    _control(security_controls.is_safe_command_input, _V, "command",
             "No shell metacharacters"),
    _control(security_controls.is_valid_host, _V, "command",
             "Hostname or dotted-quad address"),
    _control(security_controls.sanitize_command_input, _S, "command",
             "Remove shell metacharacters and trim"),
    # Path traversal
    _control(security_controls.is_safe_path, _V, "path",
             "Relative path without .. ./ or ~"),
    _control(security_controls.sanitize_path, _S, "path",
             "Remove traversal tokens and leading slashes"),
    # LDAP injection
    _control(security_controls.is_safe_ldap_input, _V, "ldap",
             "No * ( ) \\ / or NUL"),
    _control(security_controls.sanitize_ldap_input, _S, "ldap",
             "Hex-escape LDAP filter metacharacters"),
    # Email and URL
    _control(security_controls.is_valid_email, _V, "email",
             "local@domain.tld"),
    _control(security_controls.is_safe_url, _V, "url",
             "http:// or https:// only"),
]

SECURITY_CONTROLS: Dict[str, SecurityControl] = {c.name: c for c in _CONTROLS}

CATEGORIES = tuple(dict.fromkeys(c.category for c in _CONTROLS))


# =============================================================================
# LOOKUP
# =============================================================================

def get_control(name: str) -> SecurityControl:
    """Return the control registered under ``name``.

    Args:
        name: Function name, e.g. ``"is_safe_sql_input"``.

    Returns:
        The matching SecurityControl.

    Raises:
        UnknownControlError: If no control has that name.
    """
    try:
        return SECURITY_CONTROLS[name]
    except KeyError:
        raise UnknownControlError(
            f"Unknown security control '{name}'. "
            f"Available: {', '.join(SECURITY_CONTROLS)}"
        ) from None


def list_controls(
    kind: Optional[Union[ControlKind, str]] = None,
    category: Optional[str] = None,
) -> List[SecurityControl]:
    """Return registered controls, optionally filtered by kind and category.

    Args:
        kind: ControlKind or its string value ("validator", "sanitizer").
        category: One of CATEGORIES.

    Returns:
        Matching controls in registration order.

    Raises:
        InvalidControlKindError: If ``kind`` is an unknown string.
    """
    if isinstance(kind, str):
        try:
            kind = ControlKind(kind.lower())
        except ValueError:
            raise InvalidControlKindError(
                f"Invalid control kind '{kind}'. "
                f"Valid kinds: {', '.join(sorted(VALID_KINDS))}"
            ) from None

    controls = list(SECURITY_CONTROLS.values())
    if kind is not None:
        controls = [c for c in controls if c.kind is kind]
    if category is not None:
        controls = [c for c in controls if c.category == category]

    logger.debug(
        "Listing %d controls (kind=%s, category=%s)",
        len(controls), kind.value if kind else None, category
    )
    return controls


def describe_controls(
    kind: Optional[Union[ControlKind, str]] = None,
    category: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """JSON-ready version of :func:`list_controls`."""
    return [c.to_dict() for c in list_controls(kind=kind, category=category)]
