#!/usr/bin/env python3
"""OWASP Top 10 IAST Demo - Command Line Interface.

Serves the intentionally vulnerable demo application and gives command-line
access to the security controls it uses.

Usage:
    python main.py serve
    python main.py serve --host 127.0.0.1 --port 9090 --reset-db
    python main.py reset-db
    python main.py controls --kind sanitizer
    python main.py check sanitize_ldap_input "(cn=*)"
    python main.py check is_valid_host "host|cmd"
"""

import argparse
import json
import sys

from iast_demo import __version__
from iast_demo.config import (
    APP_DEBUG,
    APP_HOST,
    APP_PORT,
    DATABASE_PATH,
    configure_logging,
)
from iast_demo.controls_registry import (
    CATEGORIES,
    VALID_KINDS,
    ControlKind,
    UnknownControlError,
    get_control,
    list_controls,
)


# =============================================================================
# CONSTANTS
# =============================================================================

EXIT_OK = 0
EXIT_UNSAFE = 1
EXIT_SERVER_ERROR = 2
EXIT_UNKNOWN_CONTROL = 4

BANNER = """
===================================================================
  OWASP TOP 10 IAST DEMO
===================================================================
  WARNING: This application contains intentional vulnerabilities!
  DO NOT deploy in production or expose to untrusted networks!
===================================================================
"""


# =============================================================================
# ARGUMENT PARSER
# =============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="iast-demo",
        description="Intentionally vulnerable OWASP Top 10 demo for IAST agents",
        epilog=(
            "Examples:\n"
            "  python main.py serve --port 8080\n"
            "  python main.py controls --kind validator\n"
            "  python main.py check sanitize_sql_input \"O'Brien\"\n"
            "\n"
            f"Control categories: {', '.join(CATEGORIES)}"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Logging options
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )
    log_group.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output (WARNING level only)"
    )

    # Version
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    serve = subparsers.add_parser("serve", help="Run the demo web application")
    serve.add_argument(
        "--host",
        metavar="ADDR",
        default=APP_HOST,
        help=f"Bind address (default: {APP_HOST})"
    )
    serve.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        default=APP_PORT,
        help=f"Bind port (default: {APP_PORT})"
    )
    debug_group = serve.add_mutually_exclusive_group()
    debug_group.add_argument(
        "--debug",
        dest="debug",
        action="store_true",
        help="Enable Flask debug mode"
    )
    debug_group.add_argument(
        "--no-debug",
        dest="debug",
        action="store_false",
        help="Disable Flask debug mode, overriding APP_DEBUG"
    )
    serve.set_defaults(debug=APP_DEBUG)
    serve.add_argument(
        "--reset-db",
        action="store_true",
        help="Re-seed the demo database before starting"
    )

    subparsers.add_parser(
        "reset-db",
        help=f"Re-seed the demo database ({DATABASE_PATH})"
    )

    controls = subparsers.add_parser("controls", help="List registered security controls")
    controls.add_argument(
        "--kind",
        choices=sorted(VALID_KINDS),
        default=None,
        help="Only list validators or sanitizers"
    )
    controls.add_argument(
        "--category",
        choices=CATEGORIES,
        default=None,
        help="Only list controls for one vulnerability class"
    )
    controls.add_argument(
        "--json",
        action="store_true",
        help="Print the listing as JSON"
    )

    check = subparsers.add_parser("check", help="Run one control against a value")
    check.add_argument("name", metavar="NAME", help="Control name, e.g. is_safe_sql_input")
    check.add_argument("value", metavar="VALUE", help="Input value to check or sanitize")

    return parser


# =============================================================================
# DISPLAY HELPERS
# =============================================================================

def print_error(message: str, tip: str = None) -> None:
    """Print an error message with optional tip."""
    print(f"\nError: {message}", file=sys.stderr)
    if tip:
        print(f"Tip: {tip}", file=sys.stderr)


# =============================================================================
# COMMANDS
# =============================================================================

def run_serve(args: argparse.Namespace) -> int:
    from iast_demo.app import create_app
    from iast_demo.database import reset_db

    app = create_app({"DEBUG": args.debug})
    if args.reset_db:
        reset_db(app.config["DATABASE_PATH"])

    if not args.quiet:
        print(BANNER)
        print(f"Starting server on http://{args.host}:{args.port}")
        print()

    try:
        app.run(host=args.host, port=args.port, debug=args.debug)
    except OSError as e:
        print_error(
            f"Cannot start server on {args.host}:{args.port}: {e}",
            "Pick another port with --port"
        )
        return EXIT_SERVER_ERROR
    return EXIT_OK


def run_reset_db(args: argparse.Namespace) -> int:
    from iast_demo.database import reset_db

    reset_db()
    if not args.quiet:
        print(f"Database reset: {DATABASE_PATH}")
    return EXIT_OK


def run_controls(args: argparse.Namespace) -> int:
    controls = list_controls(kind=args.kind, category=args.category)

    if args.json:
        print(json.dumps([c.to_dict() for c in controls], indent=2))
        return EXIT_OK

    for control in controls:
        print(f"{control.name:<24} {control.kind.value:<10} {control.category:<8} {control.description}")
    return EXIT_OK


def run_check(args: argparse.Namespace) -> int:
    """Apply a control; validators exit non-zero for unsafe input."""
    try:
        control = get_control(args.name)
    except UnknownControlError as e:
        print_error(str(e), "List available controls with: python main.py controls")
        return EXIT_UNKNOWN_CONTROL

    result = control.apply(args.value)

    if control.kind is ControlKind.VALIDATOR:
        print("SAFE" if result else "UNSAFE")
        return EXIT_OK if result else EXIT_UNSAFE

    print(result)
    return EXIT_OK


COMMANDS = {
    "serve": run_serve,
    "reset-db": run_reset_db,
    "controls": run_controls,
    "check": run_check,
}


# =============================================================================
# MAIN FUNCTION
# =============================================================================

def main(argv=None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for errors or unsafe input).
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Configure logging based on flags
    if args.verbose:
        log_level = "DEBUG"
    elif args.quiet:
        log_level = "WARNING"
    else:
        log_level = "INFO"
    configure_logging(level=log_level)

    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
