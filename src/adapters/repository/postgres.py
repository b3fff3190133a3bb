"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness
----------
Email and username uniqueness is enforced by the ``users_email_key`` and
``users_username_key`` constraints. create_user() simply attempts the
INSERT and maps a UniqueViolation to the matching CreateResult, so two
concurrent registrations for the same email cannot both succeed.

Confirmation is a single conditional UPDATE, which makes it atomic and
single-use without explicit row locks.
"""

import logging
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DependencyError
from src.domain.ports import CreateResult, User

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "users_email_key"
USERNAME_CONSTRAINT = "users_username_key"


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries. Driver errors other than unique
    violations surface as DependencyError.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create_user(
        self, email: str, username: str, password_hash: str, confirm_code: str
    ) -> CreateResult:
        """
        Insert a new unconfirmed account.

        Returns:
            CREATED, or EMAIL_TAKEN / USERNAME_TAKEN depending on which
            unique constraint rejected the row
        """
        sql = """
            INSERT INTO users (email, username, password_hash, confirm_code, confirmed)
            VALUES (%s, %s, %s, %s, FALSE)
        """

        try:
            with self._pool.connection() as conn:
                conn.execute(sql, (email, username, password_hash, confirm_code))
        except errors.UniqueViolation as e:
            constraint = e.diag.constraint_name
            if constraint == USERNAME_CONSTRAINT:
                return CreateResult.USERNAME_TAKEN
            if constraint == EMAIL_CONSTRAINT:
                return CreateResult.EMAIL_TAKEN
            logger.error("Unexpected unique constraint violated: %s", constraint)
            raise DependencyError("Account store unavailable") from e
        except psycopg.Error as e:
            raise DependencyError("Account store unavailable") from e

        return CreateResult.CREATED

    def confirm_user(self, email: str, code: str) -> bool:
        """
        Confirm the unconfirmed account matching email and code.

        Returns:
            True if one row transitioned to confirmed, False otherwise
        """
        sql = """
            UPDATE users
            SET confirmed = TRUE, confirm_code = NULL, confirmed_at = NOW()
            WHERE email = %s AND confirm_code = %s AND confirmed = FALSE
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email, code))
                return cursor.rowcount == 1
        except psycopg.Error as e:
            raise DependencyError("Account store unavailable") from e

    def find_confirmed_user(self, username: str, email: str | None = None) -> User | None:
        """
        Fetch a confirmed account by username, optionally also by email.

        Returns:
            User or None when no confirmed account matches
        """
        sql = """
            SELECT email, username, password_hash, confirm_code, confirmed
            FROM users
            WHERE username = %s AND confirmed = TRUE
        """
        params: tuple[str, ...] = (username,)
        if email is not None:
            sql += " AND email = %s"
            params = (username, email)

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise DependencyError("Account store unavailable") from e

        if row is None:
            return None
        return User(
            email=row[0],
            username=row[1],
            password_hash=row[2],
            confirm_code=row[3],
            confirmed=row[4],
        )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
