"""SQLite setup and user lookups for the IAST demo application.

Passwords are stored in plain text and one lookup builds its SQL by string
concatenation. Both are part of the demo.
"""

import logging
import os
import sqlite3
from typing import Any, Dict, List, Optional

from iast_demo.config import DATABASE_PATH


logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when a demo data operation fails."""
    pass


# Seed users (plaintext passwords for demo)
SEED_USERS = [
    ("admin", "admin123", "admin@example.com", "ADMIN"),
    ("user", "password", "user@example.com", "USER"),
    ("test", "test123", "test@example.com", "USER"),
]


def get_db_connection(database_path: Optional[str] = None) -> sqlite3.Connection:
    """Get a connection to the SQLite database."""
    path = database_path or DATABASE_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(database_path: Optional[str] = None) -> None:
    """Create the users table and seed it if it is empty."""
    conn = get_db_connection(database_path)
    try:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT NOT NULL UNIQUE,
                password TEXT NOT NULL,
                email TEXT,
                role TEXT DEFAULT 'USER'
            )
        ''')

        cursor.execute("SELECT COUNT(*) FROM users")
        if cursor.fetchone()[0] == 0:
            cursor.executemany(
                "INSERT INTO users (username, password, email, role) VALUES (?, ?, ?, ?)",
                SEED_USERS
            )
            logger.info("Seeded %d demo users", len(SEED_USERS))

        conn.commit()
    finally:
        conn.close()


def reset_db(database_path: Optional[str] = None) -> None:
    """Drop and re-create the users table with the seed data."""
    conn = get_db_connection(database_path)
    try:
        conn.execute("DROP TABLE IF EXISTS users")
        conn.commit()
    finally:
        conn.close()
    init_db(database_path)
    logger.info("Database reset to initial state")


# =============================================================================
# USER LOOKUPS
# =============================================================================

def _fetch_all(database_path: Optional[str], query: str, params: tuple = ()) -> List[Dict[str, Any]]:
    conn = get_db_connection(database_path)
    try:
        rows = conn.execute(query, params).fetchall()
        return [dict(row) for row in rows]
    except sqlite3.Error as e:
        raise DatabaseError(str(e)) from e
    finally:
        conn.close()


def _execute(database_path: Optional[str], query: str, params: tuple) -> int:
    conn = get_db_connection(database_path)
    try:
        cursor = conn.execute(query, params)
        conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        raise DatabaseError(str(e)) from e
    finally:
        conn.close()


def find_user_by_id(user_id: int, database_path: Optional[str] = None) -> Optional[Dict[str, Any]]:
    users = _fetch_all(database_path, "SELECT * FROM users WHERE id = ?", (user_id,))
    return users[0] if users else None


def find_user_by_username(username: str, database_path: Optional[str] = None) -> Optional[Dict[str, Any]]:
    users = _fetch_all(database_path, "SELECT * FROM users WHERE username = ?", (username,))
    return users[0] if users else None


def find_users_by_credentials(
    username: str,
    password: str,
    database_path: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Parameterized credential lookup."""
    return _fetch_all(
        database_path,
        "SELECT * FROM users WHERE username = ? AND password = ?",
        (username, password)
    )


def build_credentials_query(username: str, password: str) -> str:
    """Build the credential query by concatenation (injectable)."""
    return (
        "SELECT * FROM users WHERE username = '" + username +
        "' AND password = '" + password + "'"
    )


def run_raw_query(query: str, database_path: Optional[str] = None) -> List[Dict[str, Any]]:
    """Execute a caller-built SQL string as-is.

    Raises:
        DatabaseError: If SQLite rejects the statement.
    """
    logger.debug("Executing raw query: %s", query)
    return _fetch_all(database_path, query)


def delete_user(user_id: int, database_path: Optional[str] = None) -> bool:
    """Delete a user; returns False if no row matched."""
    return _execute(database_path, "DELETE FROM users WHERE id = ?", (user_id,)) > 0


def update_user_email(user_id: int, email: str, database_path: Optional[str] = None) -> bool:
    """Set a user's email; returns False if no row matched."""
    return _execute(
        database_path, "UPDATE users SET email = ? WHERE id = ?", (email, user_id)
    ) > 0
