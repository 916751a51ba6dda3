"""Unit tests for the demo database layer."""

import pytest

from iast_demo import database
from iast_demo.database import (
    SEED_USERS,
    DatabaseError,
    build_credentials_query,
    delete_user,
    find_user_by_id,
    find_user_by_username,
    find_users_by_credentials,
    init_db,
    reset_db,
    run_raw_query,
    update_user_email,
)


@pytest.fixture
def seeded_db(tmp_path):
    """Provide a freshly seeded database in a nested directory."""
    path = str(tmp_path / "nested" / "demo.db")
    init_db(path)
    return path


# =============================================================================
# SETUP
# =============================================================================

class TestInitAndReset:
    """Tests for init_db and reset_db."""

    def test_init_creates_parent_directory_and_seeds(self, seeded_db):
        users = run_raw_query("SELECT username FROM users ORDER BY id", seeded_db)
        assert [u["username"] for u in users] == [u[0] for u in SEED_USERS]

    def test_init_is_idempotent(self, seeded_db):
        init_db(seeded_db)
        assert len(run_raw_query("SELECT * FROM users", seeded_db)) == len(SEED_USERS)

    def test_reset_restores_deleted_users(self, seeded_db):
        assert delete_user(1, seeded_db)
        assert find_user_by_id(1, seeded_db) is None

        reset_db(seeded_db)

        admin = find_user_by_id(1, seeded_db)
        assert admin["username"] == "admin"
        assert admin["role"] == "ADMIN"

    def test_seed_passwords_are_plaintext(self, seeded_db):
        assert find_user_by_username("user", seeded_db)["password"] == "password"


# =============================================================================
# LOOKUPS
# =============================================================================

class TestLookups:
    """Tests for user lookups and updates."""

    def test_find_by_credentials(self, seeded_db):
        users = find_users_by_credentials("admin", "admin123", seeded_db)
        assert len(users) == 1
        assert users[0]["email"] == "admin@example.com"

    def test_find_by_credentials_is_parameterized(self, seeded_db):
        assert find_users_by_credentials("admin' OR '1'='1", "x", seeded_db) == []

    def test_find_unknown_user(self, seeded_db):
        assert find_user_by_username("nobody", seeded_db) is None

    def test_update_email(self, seeded_db):
        assert update_user_email(2, "new@example.com", seeded_db)
        assert find_user_by_id(2, seeded_db)["email"] == "new@example.com"

    def test_update_missing_user(self, seeded_db):
        assert not update_user_email(99, "x@example.com", seeded_db)

    def test_delete_missing_user(self, seeded_db):
        assert not delete_user(99, seeded_db)


class TestRawQueries:
    """Tests for the concatenated credential query."""

    def test_build_credentials_query(self):
        assert build_credentials_query("admin", "pw") == (
            "SELECT * FROM users WHERE username = 'admin' AND password = 'pw'"
        )

    def test_concatenated_query_is_injectable(self, seeded_db):
        query = build_credentials_query("' OR '1'='1' --", "anything")
        assert len(run_raw_query(query, seeded_db)) == len(SEED_USERS)

    def test_malformed_query_raises_database_error(self, seeded_db):
        query = build_credentials_query("'", "x")
        with pytest.raises(DatabaseError):
            run_raw_query(query, seeded_db)

    def test_default_path_from_config(self, tmp_path, monkeypatch):
        path = str(tmp_path / "default.db")
        monkeypatch.setattr(database, "DATABASE_PATH", path)
        init_db()
        assert find_user_by_username("test")["email"] == "test@example.com"
