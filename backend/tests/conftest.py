import io
import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Module-level storage singletons read this at import; keep test uploads out of the tree.
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="bookstore-uploads-"))


def make_png(color="red", size=(8, 8)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def books_api(monkeypatch, tmp_path):
    """A bare app around the books router with a fresh store and upload dir."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from api.errors import install_error_handlers
    from api.routes import books as books_router
    from repositories import BooksRepository
    from storage.file_storage import FileStorage

    repo = BooksRepository()
    storage = FileStorage(tmp_path / "uploads")
    monkeypatch.setattr(books_router, "books_repo", repo)
    monkeypatch.setattr(books_router, "storage", storage)

    app = FastAPI()
    install_error_handlers(app)
    app.include_router(books_router.router, prefix="/books")
    return SimpleNamespace(client=TestClient(app), repo=repo, storage=storage)
