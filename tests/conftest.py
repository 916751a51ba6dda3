"""Pytest configuration and shared fixtures.

This module provides shared fixtures for testing the IAST demo:
- Flask app and test client backed by a temporary SQLite database
- Mock fixtures for outbound HTTP responses and subprocess results
- Integration test fixtures for a running demo server
"""

import socket
from unittest.mock import MagicMock

import pytest

from iast_demo.app import create_app


# =============================================================================
# TEST MARKERS CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a running demo server"
    )
    config.addinivalue_line(
        "markers", "requires_target: mark test as requiring the demo application to be running"
    )


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture
def app(tmp_path):
    """Provide a demo app using temporary storage."""
    files_dir = tmp_path / "files"
    files_dir.mkdir()
    (files_dir / "readme.txt").write_text("hello demo\n")
    (files_dir / "docs").mkdir()
    (files_dir / "docs" / "report.txt").write_text("quarterly\n")

    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()

    app = create_app({
        "TESTING": True,
        "DATABASE_PATH": str(tmp_path / "test.db"),
        "FILES_DIR": str(files_dir),
        "UPLOAD_DIR": str(upload_dir),
        "OUTBOUND_TIMEOUT": 1,
    })
    return app


@pytest.fixture
def client(app):
    """Provide a Flask test client."""
    return app.test_client()


@pytest.fixture
def db_path(app):
    """Provide the temporary database path used by the app."""
    return app.config["DATABASE_PATH"]


# =============================================================================
# MOCK FIXTURES
# =============================================================================

def create_mock_http_response(
    status_code: int = 200,
    text: str = "<html><body>Test</body></html>",
    content_type: str = "text/html; charset=utf-8",
):
    """Create a mock requests.Response for the SSRF endpoints."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = {"Content-Type": content_type}
    return response


@pytest.fixture
def mock_http_response():
    """Factory fixture for creating mock HTTP responses."""
    return create_mock_http_response


@pytest.fixture
def completed_ping():
    """Provide a mock CompletedProcess for ping commands."""
    result = MagicMock()
    result.stdout = "PING 127.0.0.1: 56 data bytes\n3 packets transmitted, 3 received\n"
    result.stderr = ""
    result.returncode = 0
    return result


# =============================================================================
# INTEGRATION FIXTURES
# =============================================================================

@pytest.fixture
def target_url():
    """Provide demo server URL and skip test if not accessible.

    Returns:
        str: Demo server base URL if accessible.

    Raises:
        pytest.skip: If the demo server is not accessible.
    """
    target_url = "http://localhost:8080"
    if not _is_service_available("localhost", 8080):
        pytest.skip("Demo application is not running on localhost:8080")
    return target_url


def _is_service_available(host: str, port: int, timeout: float = 1.0) -> bool:
    """Check if a service is available at the given host and port."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False
