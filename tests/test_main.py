"""Tests for the command-line interface."""

import json
from unittest.mock import MagicMock, patch

import pytest

import main
from iast_demo import database


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

class TestArgumentParser:
    """Tests for create_argument_parser."""

    def test_command_is_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])
        assert exc_info.value.code == 2

    def test_verbose_and_quiet_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.main(["-v", "-q", "controls"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--version"])
        assert exc_info.value.code == 0
        assert "iast-demo 0.1.0" in capsys.readouterr().out

    def test_serve_defaults(self):
        args = main.create_argument_parser().parse_args(["serve"])
        assert args.host == main.APP_HOST
        assert args.port == main.APP_PORT
        assert args.reset_db is False

    def test_debug_follows_environment_default(self, monkeypatch):
        monkeypatch.setattr(main, "APP_DEBUG", True)
        args = main.create_argument_parser().parse_args(["serve"])
        assert args.debug is True

    def test_no_debug_overrides_environment(self, monkeypatch):
        """APP_DEBUG=true can still be switched off from the command line."""
        monkeypatch.setattr(main, "APP_DEBUG", True)
        args = main.create_argument_parser().parse_args(["serve", "--no-debug"])
        assert args.debug is False

    def test_debug_flag(self, monkeypatch):
        monkeypatch.setattr(main, "APP_DEBUG", False)
        args = main.create_argument_parser().parse_args(["serve", "--debug"])
        assert args.debug is True

    def test_debug_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.create_argument_parser().parse_args(["serve", "--debug", "--no-debug"])

    def test_invalid_kind_choice(self):
        with pytest.raises(SystemExit):
            main.main(["controls", "--kind", "encoder"])


# =============================================================================
# CHECK COMMAND
# =============================================================================

class TestCheckCommand:
    """Tests for the check command."""

    def test_validator_safe(self, capsys):
        assert main.main(["check", "is_valid_host", "example.com"]) == main.EXIT_OK
        assert capsys.readouterr().out.strip() == "SAFE"

    def test_validator_unsafe(self, capsys):
        assert main.main(["check", "is_valid_host", "host|cmd"]) == main.EXIT_UNSAFE
        assert capsys.readouterr().out.strip() == "UNSAFE"

    def test_sanitizer_prints_result(self, capsys):
        assert main.main(["check", "sanitize_ldap_input", "(cn=*)"]) == main.EXIT_OK
        assert capsys.readouterr().out.strip() == "\\28cn=\\2a\\29"

    def test_unknown_control(self, capsys):
        assert main.main(["check", "is_safe_everything", "x"]) == main.EXIT_UNKNOWN_CONTROL
        err = capsys.readouterr().err
        assert "Error: Unknown security control 'is_safe_everything'" in err
        assert "Tip:" in err


# =============================================================================
# CONTROLS COMMAND
# =============================================================================

class TestControlsCommand:
    """Tests for the controls command."""

    def test_table_output(self, capsys):
        assert main.main(["controls", "--category", "path"]) == main.EXIT_OK
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("is_safe_path")
        assert lines[1].startswith("sanitize_path")

    def test_json_output(self, capsys):
        assert main.main(["controls", "--kind", "validator", "--json"]) == main.EXIT_OK
        controls = json.loads(capsys.readouterr().out)
        assert len(controls) == 11
        assert all(c["kind"] == "validator" for c in controls)


# =============================================================================
# DATABASE AND SERVER COMMANDS
# =============================================================================

class TestServerCommands:
    """Tests for reset-db and serve."""

    def test_reset_db(self, tmp_path, monkeypatch, capsys):
        path = str(tmp_path / "cli.db")
        monkeypatch.setattr(database, "DATABASE_PATH", path)

        assert main.main(["reset-db"]) == main.EXIT_OK
        assert database.find_user_by_username("admin", path) is not None
        assert "Database reset" in capsys.readouterr().out

    def test_serve_runs_app(self, capsys):
        app = MagicMock()
        app.config = {"DATABASE_PATH": "unused.db"}
        with patch("iast_demo.app.create_app", return_value=app) as create_app:
            code = main.main(["serve", "--host", "127.0.0.1", "--port", "9090", "--no-debug"])

        assert code == main.EXIT_OK
        create_app.assert_called_once_with({"DEBUG": False})
        app.run.assert_called_once_with(host="127.0.0.1", port=9090, debug=False)
        assert "Starting server on http://127.0.0.1:9090" in capsys.readouterr().out

    def test_serve_reset_db(self, tmp_path):
        app = MagicMock()
        app.config = {"DATABASE_PATH": str(tmp_path / "serve.db")}
        with patch("iast_demo.app.create_app", return_value=app), \
                patch("iast_demo.database.reset_db") as reset_db:
            main.main(["-q", "serve", "--reset-db"])
        reset_db.assert_called_once_with(str(tmp_path / "serve.db"))

    def test_serve_port_in_use(self, capsys):
        app = MagicMock()
        app.config = {"DATABASE_PATH": "unused.db"}
        app.run.side_effect = OSError("Address already in use")
        with patch("iast_demo.app.create_app", return_value=app):
            code = main.main(["-q", "serve", "--port", "8080"])

        assert code == main.EXIT_SERVER_ERROR
        assert "Cannot start server on" in capsys.readouterr().err
