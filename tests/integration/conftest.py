import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from findoc.config.settings import Settings
from findoc.database.connection import close_pool, get_connection, init_pool
from findoc.database.models import JobRecord

SCHEMA = """
CREATE TABLE IF NOT EXISTS financial_documents (
    id BIGSERIAL PRIMARY KEY,
    kind TEXT NOT NULL,
    file_path TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending'
);
CREATE TABLE IF NOT EXISTS paystub_data (
    id BIGSERIAL PRIMARY KEY,
    document_id BIGINT NOT NULL UNIQUE REFERENCES financial_documents(id) ON DELETE CASCADE,
    gross_pay DOUBLE PRECISION,
    net_pay DOUBLE PRECISION,
    pay_period_start DATE,
    pay_period_end DATE,
    extracted_data JSONB
);
CREATE TABLE IF NOT EXISTS bank_statement_data (
    id BIGSERIAL PRIMARY KEY,
    document_id BIGINT NOT NULL UNIQUE REFERENCES financial_documents(id) ON DELETE CASCADE,
    statement_month DATE,
    total_deposits DOUBLE PRECISION NOT NULL DEFAULT 0,
    total_withdrawals DOUBLE PRECISION NOT NULL DEFAULT 0,
    ending_balance DOUBLE PRECISION,
    transactions JSONB NOT NULL DEFAULT '[]'::jsonb
);
CREATE TABLE IF NOT EXISTS extraction_jobs (
    id BIGSERIAL PRIMARY KEY,
    document_id BIGINT NOT NULL REFERENCES financial_documents(id) ON DELETE CASCADE,
    status TEXT NOT NULL DEFAULT 'pending',
    attempts INTEGER NOT NULL DEFAULT 0,
    error_message TEXT,
    locked_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "findoc_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Document ids to delete after the test; dependent rows cascade."""
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM financial_documents WHERE id = ANY(%s)", (cleanup,))
        conn.commit()


def _insert_document(
    db_conn: psycopg.Connection[Any],
    cleanup: list[int],
    kind: str,
    file_path: str = "user-1/document.pdf",
) -> int:
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO financial_documents (kind, file_path, status)
            VALUES (%s, %s, 'pending')
            RETURNING id
            """,
            (kind, file_path),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = int(row[0])
    db_conn.commit()
    cleanup.append(document_id)
    return document_id


def _insert_job(db_conn: psycopg.Connection[Any], document_id: int, attempts: int = 0) -> JobRecord:
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO extraction_jobs (document_id, status, attempts)
            VALUES (%s, 'pending', %s)
            RETURNING id, document_id, status, attempts
            """,
            (document_id, attempts),
        )
        row = cur.fetchone()
        assert row is not None
    db_conn.commit()
    return JobRecord(
        id=row["id"],
        document_id=row["document_id"],
        status=row["status"],
        attempts=row["attempts"],
    )


@pytest.fixture
def seed_paystub(db_conn: psycopg.Connection[Any], integration_cleanup: list[int]) -> int:
    return _insert_document(db_conn, integration_cleanup, "paystub", "user-1/stub.pdf")


@pytest.fixture
def seed_statement(db_conn: psycopg.Connection[Any], integration_cleanup: list[int]) -> int:
    return _insert_document(db_conn, integration_cleanup, "bank_statement", "user-1/statement.pdf")


@pytest.fixture
def seed_job(db_conn: psycopg.Connection[Any], seed_paystub: int) -> JobRecord:
    return _insert_job(db_conn, seed_paystub)


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


def _fetch_status(db_conn: psycopg.Connection[Any], table: str, row_id: int) -> str:
    with db_conn.cursor() as cur:
        cur.execute(f"SELECT status FROM {table} WHERE id = %s", (row_id,))  # noqa: S608
        row = cur.fetchone()
    db_conn.commit()
    assert row is not None
    return str(row[0])


@pytest.fixture
def make_job(db_conn: psycopg.Connection[Any]) -> Callable[..., JobRecord]:
    def factory(document_id: int, attempts: int = 0) -> JobRecord:
        return _insert_job(db_conn, document_id, attempts)

    return factory


@pytest.fixture
def status_of(db_conn: psycopg.Connection[Any]) -> Callable[[str, int], str]:
    def lookup(table: str, row_id: int) -> str:
        return _fetch_status(db_conn, table, row_id)

    return lookup
