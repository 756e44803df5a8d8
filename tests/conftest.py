"""Shared test fixtures for pytest"""
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.config import Settings  # noqa: E402
from main import create_app  # noqa: E402
from services.storage.local_storage import LocalImageStorage  # noqa: E402
from services.timeline_store import TimelineStore  # noqa: E402

# Smallest valid PNG and a JPEG header, enough for byte comparisons
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\nIDATx\x9cc\x00\x01"
    b"\x00\x00\x05\x00\x01\r\n-\xb4\x00\x00\x00\x00IEND\xaeB`\x82"
)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a temporary public tree with both pages present"""
    test_settings = Settings(public_root=tmp_path / "public")

    test_settings.server_root.mkdir(parents=True)
    (test_settings.server_root / "index.html").write_text(
        "<!DOCTYPE html><title>Timeline</title>", encoding="utf-8"
    )
    (test_settings.server_root / "admin.html").write_text(
        "<!DOCTYPE html><title>Timeline Admin</title>", encoding="utf-8"
    )
    test_settings.images_dir.mkdir(parents=True)
    test_settings.timeline_path.parent.mkdir(parents=True)

    return test_settings


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    """HTTP client for API testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def timeline_store(tmp_path):
    return TimelineStore(tmp_path / "json" / "timeline.json")


@pytest.fixture
def image_storage(tmp_path):
    return LocalImageStorage(tmp_path / "imgs")


@pytest.fixture
def upload_files():
    """Multipart file parts for a complete upload"""
    return {
        "avatar": ("a.png", PNG_BYTES, "image/png"),
        "image": ("b.jpg", JPEG_BYTES, "image/jpeg"),
    }
