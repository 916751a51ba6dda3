"""Validators and sanitizers for the demo application's secure endpoints.

Every function takes a single string (or ``None``) and returns either a
boolean verdict (validators) or a new string (sanitizers). Nothing here
performs I/O or keeps state, so the functions can be called from any thread.

Absent input is handled per function and the convention is deliberately
asymmetric: permissive validators treat ``None``/``""`` as safe, strict ones
(usernames, hosts, paths, emails, URLs) treat them as unsafe. Sanitizers
return ``None`` unchanged.

Several controls have known bypasses (sanitizers do not re-scan their output,
the host pattern accepts octets above 255). They are kept as-is because the
demo relies on them.

Example:
    >>> from iast_demo.security_controls import is_safe_sql_input, sanitize_sql_input
    >>> is_safe_sql_input("john_doe")
    True
    >>> sanitize_sql_input("O'Brien")
    "O''Brien"
"""

import re
from typing import Optional, Sequence, Tuple


# =============================================================================
# PATTERNS AND REPLACEMENT TABLES
# =============================================================================

_SAFE_SQL_PATTERN = re.compile(r"[a-zA-Z0-9_@.\-]+")
_USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]{3,20}")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_SAFE_TEXT_PATTERN = re.compile(r"[a-zA-Z0-9 .,!?\-@]+")
_HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
_HOST_PATTERN = re.compile(
    r"[a-zA-Z0-9][a-zA-Z0-9.-]{0,61}[a-zA-Z0-9]"
    r"|[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}"
)
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_COMMAND_METACHARS = "\n;|&$`()<>\\!"
_COMMAND_METACHAR_PATTERN = re.compile(r"[;|&$`\n()<>\\!]")
_LEADING_SLASHES = re.compile(r"^/+")
_EDGE_CONTROL_CHARS = re.compile(r"^[\x00-\x20]+|[\x00-\x20]+$")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_DANGEROUS_HTML_MARKERS = ("<script", "</script", "javascript:", "onerror=", "onload=")
_LDAP_METACHARS = ("*", "(", ")", "\\", "/", "\0")
_SAFE_URL_SCHEMES = ("http://", "https://")

# Applied in order; later pairs see the output of earlier ones.
SQL_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("'", "''"),
    ('"', '""'),
    ("\\", "\\\\"),
    (";", ""),
    ("--", ""),
    ("/*", ""),
    ("*/", ""),
    ("xp_", ""),
    ("sp_", ""),
)

# "&" first so entities produced below are not escaped twice.
HTML_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)

# Backslash first so escapes produced below are not escaped twice.
LDAP_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("\\", "\\5c"),
    ("*", "\\2a"),
    ("(", "\\28"),
    (")", "\\29"),
    ("\0", "\\00"),
)

PATH_REMOVALS: Tuple[str, ...] = ("..", "./", "~")


def _apply_replacements(value: str, replacements: Sequence[Tuple[str, str]]) -> str:
    """Apply ``(old, new)`` pairs to ``value`` one after another."""
    for old, new in replacements:
        value = value.replace(old, new)
    return value


# =============================================================================
# SQL INJECTION
# =============================================================================

def is_safe_sql_input(value: Optional[str]) -> bool:
    """Check that a value only holds characters that are inert in SQL.

    Allowed: ASCII letters, digits, ``_``, ``-``, ``.`` and ``@``.

    Args:
        value: The string to validate.

    Returns:
        True for ``None``, ``""`` or an all-safe string.
    """
    if not value:
        return True
    return _SAFE_SQL_PATTERN.fullmatch(value) is not None


def is_safe_username(value: Optional[str]) -> bool:
    """Check a username: 3-20 ASCII letters, digits or underscores.

    Stricter than :func:`is_safe_sql_input`: ``None`` and ``""`` are rejected.
    """
    if not value:
        return False
    return _USERNAME_PATTERN.fullmatch(value) is not None


def is_numeric(value: Optional[str]) -> bool:
    """Check that a value parses as a signed 64-bit integer.

    Args:
        value: The string to validate.

    Returns:
        True if ``value`` is an optionally signed run of decimal digits
        (any script) whose value fits in 64 bits. ``None`` and ``""`` are
        not numeric.
    """
    if not value or _INTEGER_PATTERN.fullmatch(value) is None:
        return False
    return _INT64_MIN <= int(value) <= _INT64_MAX


def sanitize_sql_input(value: Optional[str]) -> Optional[str]:
    """Escape quotes and strip SQL comment/statement tokens.

    Quotes and backslashes are doubled; ``;``, ``--``, ``/*``, ``*/``,
    ``xp_`` and ``sp_`` are removed. The output is not re-scanned, so a
    crafted value such as ``"-/**/-"`` still produces ``"--"``.

    Args:
        value: The string to sanitize.

    Returns:
        The sanitized string, or ``None`` if ``value`` is ``None``.
    """
    if value is None:
        return None
    return _apply_replacements(value, SQL_REPLACEMENTS)


# =============================================================================
# CROSS-SITE SCRIPTING
# =============================================================================

def is_safe_html_input(value: Optional[str]) -> bool:
    """Reject values containing angle brackets or common script vectors.

    The marker check (``<script``, ``javascript:``, ``onerror=`` ...) is
    case-insensitive; the ``<``/``>`` check looks at the raw value.
    """
    if not value:
        return True
    lowered = value.lower()
    if any(marker in lowered for marker in _DANGEROUS_HTML_MARKERS):
        return False
    return "<" not in value and ">" not in value


def is_safe_text_pattern(value: Optional[str]) -> bool:
    """Allow-list check for plain text: letters, digits, space and ``.,!?-@``."""
    if not value:
        return True
    return _SAFE_TEXT_PATTERN.fullmatch(value) is not None


def sanitize_html_output(value: Optional[str]) -> Optional[str]:
    """HTML-encode ``& < > " ' /`` for safe output in element content.

    Args:
        value: The string to encode.

    Returns:
        The encoded string, or ``None`` if ``value`` is ``None``.
    """
    if value is None:
        return None
    return _apply_replacements(value, HTML_REPLACEMENTS)


def strip_html_tags(value: Optional[str]) -> Optional[str]:
    """Delete every ``<...>`` tag, keeping the text between tags."""
    if value is None:
        return None
    return _HTML_TAG_PATTERN.sub("", value)


# =============================================================================
# COMMAND INJECTION
# =============================================================================

def is_safe_command_input(value: Optional[str]) -> bool:
    """Reject values containing shell metacharacters.

    Rejected characters: ``; | & $ ` ( ) < > \\ !`` and newline.
    """
    if not value:
        return True
    return not any(char in value for char in _COMMAND_METACHARS)


def is_valid_host(value: Optional[str]) -> bool:
    """Check that a value looks like a hostname or a dotted-quad address.

    Hostnames must start and end with an alphanumeric character, with at most
    61 letters, digits, dots or hyphens in between. Dotted quads are four
    groups of one to three digits; octets are not range-checked, so
    ``999.999.999.999`` is accepted.

    Args:
        value: The host to validate.

    Returns:
        True if ``value`` matches either form; False for ``None`` or ``""``.
    """
    if not value:
        return False
    return _HOST_PATTERN.fullmatch(value) is not None


def sanitize_command_input(value: Optional[str]) -> Optional[str]:
    """Remove shell metacharacters, then trim surrounding whitespace.

    Trimming drops leading and trailing characters in ``\\x00``-``\\x20``
    (spaces and control characters) only; other Unicode spaces are kept.
    """
    if value is None:
        return None
    return _EDGE_CONTROL_CHARS.sub("", _COMMAND_METACHAR_PATTERN.sub("", value))


# =============================================================================
# PATH TRAVERSAL
# =============================================================================

def is_safe_path(value: Optional[str]) -> bool:
    """Check a relative path for traversal sequences.

    Args:
        value: The path to validate.

    Returns:
        False for ``None``, ``""``, absolute paths, or paths containing
        ``..``, ``./`` or ``~``.
    """
    if not value:
        return False
    if value.startswith("/"):
        return False
    return not any(token in value for token in PATH_REMOVALS)


def sanitize_path(value: Optional[str]) -> Optional[str]:
    """Remove ``..``, ``./`` and ``~`` in turn, then any leading slashes.

    This is a filter, not a path resolver: each removal runs once, so
    ``".~.~/etc"`` comes out as ``"../etc"``.
    """
    if value is None:
        return None
    for token in PATH_REMOVALS:
        value = value.replace(token, "")
    return _LEADING_SLASHES.sub("", value)


# =============================================================================
# LDAP INJECTION
# =============================================================================

def is_safe_ldap_input(value: Optional[str]) -> bool:
    """Reject values containing LDAP filter metacharacters ``* ( ) \\ /`` or NUL."""
    if not value:
        return True
    return not any(char in value for char in _LDAP_METACHARS)


def sanitize_ldap_input(value: Optional[str]) -> Optional[str]:
    """Escape LDAP filter metacharacters as ``\\XX`` hex sequences.

    Args:
        value: The string to escape.

    Returns:
        The escaped string, or ``None`` if ``value`` is ``None``.

    Example:
        >>> sanitize_ldap_input("(cn=*)")
        '\\\\28cn=\\\\2a\\\\29'
    """
    if value is None:
        return None
    return _apply_replacements(value, LDAP_REPLACEMENTS)


# =============================================================================
# EMAIL AND URL
# =============================================================================

def is_valid_email(value: Optional[str]) -> bool:
    """Basic ``local@domain.tld`` shape check."""
    if not value:
        return False
    return _EMAIL_PATTERN.fullmatch(value) is not None


def is_safe_url(value: Optional[str]) -> bool:
    """Allow only ``http://`` and ``https://`` URLs (scheme is case-insensitive)."""
    if not value:
        return False
    return value.lower().startswith(_SAFE_URL_SCHEMES)
