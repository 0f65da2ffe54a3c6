"""
Form-driven web front end for the catalog.

Run with: uvicorn ui.server:app --port 3000

The page talks to the catalog API at ``CATALOG_API_URL``. Each form post
performs one action against the API, then redirects back to ``/``.
"""
import logging
import threading
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, File, Form, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from settings import settings
from ui.client import CatalogClient, ImageUpload
from ui.page import CatalogPage
from ui.render import render_page

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Bookstore Inventory UI", version="0.1.0")
page = CatalogPage(CatalogClient())

# Handlers are plain functions so FastAPI runs the blocking API calls in its
# threadpool; this lock serializes them against the shared page state.
_page_lock = threading.Lock()


def _back_to_page() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def _to_image(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    if image is None or not image.filename:
        return None
    return ImageUpload(
        filename=image.filename,
        content=image.file.read(),
        content_type=image.content_type,
    )


@app.get("/", response_class=HTMLResponse)
def show_page():
    """Render the catalog, fetching the list on first display."""
    with _page_lock:
        if not page.loaded:
            page.load()
        return HTMLResponse(render_page(page, api_base_url=page.client.base_url))


@app.post("/refresh")
def refresh():
    with _page_lock:
        page.load()
    return _back_to_page()


@app.post("/add")
def add_book(
    title: str = Form(""),
    author: str = Form(""),
    price: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    upload = _to_image(image)
    with _page_lock:
        page.add(title, author, price, upload)
    return _back_to_page()


@app.post("/edit/{book_id}")
def start_edit(book_id: int):
    with _page_lock:
        found = page.start_edit(book_id)
    if not found:
        logger.warning("No book %s to edit", book_id)
    return _back_to_page()


@app.post("/edit")
def submit_edit(
    title: str = Form(""),
    author: str = Form(""),
    price: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    upload = _to_image(image)
    with _page_lock:
        page.submit_edit(title, author, price, upload)
    return _back_to_page()


@app.post("/cancel")
def cancel_edit():
    with _page_lock:
        page.cancel_edit()
    return _back_to_page()


@app.post("/delete/{book_id}")
def delete_book(book_id: int):
    with _page_lock:
        page.delete(book_id)
    return _back_to_page()
