import base64
import io
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from visionocr.auth.models import AuthenticatedUser, Session
from visionocr.auth.session_store import SessionStore

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

USER_ID = "0b5e4c2a-1f7d-4a53-9a8e-3d2f6c1b7e90"


@pytest.fixture()
def sample_png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def user_session() -> Session:
    return Session(
        access_token="user-token",
        refresh_token="refresh-token",
        user=AuthenticatedUser(id=USER_ID, email="reader@example.com"),
    )


@pytest.fixture()
def session_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture()
def signed_in_store(session_store: SessionStore, user_session: Session) -> SessionStore:
    session_store.save(user_session)
    return session_store
