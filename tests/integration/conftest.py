import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from visionocr.config.settings import Settings
from visionocr.database.connection import build_conninfo, close_pool, get_connection, init_pool
from visionocr.database.models import DocumentRecord
from visionocr.database.repositories.documents_repository import DocumentsRepository

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "visionocr" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "visionocr_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session", autouse=True)
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3) as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def user_id() -> Generator[str, None, None]:
    """A fresh user whose rows are removed after the test."""
    new_user_id = str(uuid.uuid4())
    yield new_user_id
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE user_id = %s", (new_user_id,))
        conn.commit()


@pytest.fixture
def other_user_id() -> Generator[str, None, None]:
    new_user_id = str(uuid.uuid4())
    yield new_user_id
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE user_id = %s", (new_user_id,))
        conn.commit()


@pytest.fixture
def seed_document(user_id: str) -> DocumentRecord:
    return DocumentsRepository().create(user_id, "receipt.png", "image/png", 2048)
