# src/tabledao/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
Template tests run against a mock executor; SqlRunner tests need a
PostgreSQL database at DATABASE_URL and are skipped when none is reachable.
"""

import os

# Set environment BEFORE importing any app modules
os.environ["TABLEDAO_ENV"] = "test"

from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg.rows import dict_row

from tabledao import db
from tabledao.config import config
from tabledao.entity import Entity
from tabledao.runner import SqlRunner
from tabledao.template import DaoTemplate

# =============================================================================
# Executor Fixtures
# =============================================================================


@pytest.fixture
def executor():
    """A mock executor with the SqlRunner interface and neutral return values."""
    mock = MagicMock(spec=SqlRunner)
    mock.insert.return_value = 1
    mock.insert_for_generated_keys.return_value = [1]
    mock.insert_for_generated_key.return_value = 1
    mock.delete.return_value = 1
    mock.update.return_value = 1
    mock.find.return_value = None
    mock.count.return_value = 0
    return mock


@pytest.fixture
def users(executor):
    """A DaoTemplate for the users table backed by the mock executor."""
    return DaoTemplate("users", executor=executor)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_connection():
    """
    Provide a database connection with transaction rollback.

    Creates the users table inside the test transaction, so the schema and
    every row written during the test disappear on rollback.
    """
    try:
        conn = psycopg.connect(config.database_url, connect_timeout=3)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    with conn.cursor() as cur:
        cur.execute("""
            CREATE TEMPORARY TABLE users (
                id SERIAL PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT UNIQUE,
                active BOOLEAN NOT NULL DEFAULT true
            )
        """)

    # Override the db module to use this connection
    db.set_connection_override(conn)

    yield conn

    # Rollback any changes made during the test
    conn.rollback()
    db.clear_connection_override()
    conn.close()


@pytest.fixture
def db_cursor(db_connection):
    """Provide a cursor for direct SQL operations in tests."""
    with db_connection.cursor(row_factory=dict_row) as cur:
        yield cur


@pytest.fixture
def runner(db_connection):
    """Provide a SqlRunner bound to the test connection."""
    return SqlRunner()


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def sample_users(db_cursor) -> list[dict]:
    """Create three test users, the last one inactive."""
    users = [
        ("alice", "alice@example.com", True),
        ("bob", "bob@example.com", True),
        ("carol", None, False),
    ]
    rows = []
    for name, email, active in users:
        db_cursor.execute(
            "INSERT INTO users (name, email, active) VALUES (%s, %s, %s) RETURNING *",
            (name, email, active),
        )
        rows.append(db_cursor.fetchone())
    return rows


@pytest.fixture
def user_entity() -> Entity:
    return Entity.create("users").set("name", "dave").set("email", "dave@example.com")
