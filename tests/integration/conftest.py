import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from docgate.config.settings import Settings
from docgate.database.connection import close_pool, get_connection, init_pool
from docgate.database.models import IngestionJobRecord
from text_samples import make_document_text


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "knowledge_base_test")
    return Settings()


def _choose_existing_organization_id(db_conn: psycopg.Connection[Any]) -> str:
    with db_conn.cursor() as cur:
        cur.execute("SELECT id FROM organizations ORDER BY created_at LIMIT 1")
        row = cur.fetchone()
    if row is None:
        pytest.skip("No organizations rows in DB for integration test setup")
    return str(row[0])


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings, wait_timeout=5)
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at it.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup() -> Generator[list[tuple[str, Any]], None, None]:
    cleanup: list[tuple[str, Any]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "document_ingestion_jobs":
                    cur.execute("DELETE FROM document_ingestion_jobs WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "ai_documents":
                    cur.execute("DELETE FROM approved_files_queue WHERE document_id = %s", (row_id,))
                    cur.execute("DELETE FROM ai_upload_audit WHERE document_id = %s", (row_id,))
                    cur.execute("DELETE FROM ai_document_chunks WHERE document_id = %s", (row_id,))
                    cur.execute("DELETE FROM ai_documents WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
) -> tuple[str, str]:
    """Insert a text/plain ai_documents row. Returns (document_id, file_path)."""
    organization_id = _choose_existing_organization_id(db_conn)
    file_path = f"{organization_id}/{uuid.uuid4()}.txt"
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO ai_documents
            (organization_id, file_name, file_path, mime_type, file_size,
             document_type, processing_status)
            VALUES (%s, %s, %s, %s, %s, %s, 'pending')
            RETURNING id
            """,
            (organization_id, "policy.txt", file_path, "text/plain", 2048, "policy"),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = str(row[0])
    db_conn.commit()
    integration_cleanup.append(("ai_documents", document_id))
    return (document_id, file_path)


@pytest.fixture
def seed_job(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
    seed_document: tuple[str, str],
) -> IngestionJobRecord:
    document_id = seed_document[0]
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO document_ingestion_jobs (document_id, status, attempts)
            VALUES (%s, 'pending', 0)
            RETURNING id
            """,
            (document_id,),
        )
        row = cur.fetchone()
        assert row is not None
        job_id = row["id"]
    db_conn.commit()
    integration_cleanup.append(("document_ingestion_jobs", job_id))
    return IngestionJobRecord(id=job_id, document_id=document_id, status="pending", attempts=0)


@pytest.fixture
def document_on_disk(seed_document: tuple[str, str], files_root: Path) -> tuple[str, Path]:
    document_id, file_path = seed_document
    path = files_root / file_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(make_document_text(paragraphs=4, paragraph_length=400), encoding="utf-8")
    return (document_id, files_root)
