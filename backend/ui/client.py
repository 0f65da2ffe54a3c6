"""
HTTP client for the catalog endpoint, used by the UI.

Every call maps to one request against ``/books``. Non-2xx responses raise
``CatalogAPIError`` with the server's ``error`` message; transport failures
surface as ``requests`` exceptions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from domain.models import Book
from settings import settings

logger = logging.getLogger(__name__)


class CatalogAPIError(Exception):
    """The catalog endpoint answered with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content: bytes
    content_type: Optional[str] = None


class CatalogClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.CATALOG_API_URL).rstrip("/")
        self.timeout = settings.CATALOG_API_TIMEOUT if timeout is None else timeout
        self._session = session or requests.Session()

    @property
    def books_url(self) -> str:
        return f"{self.base_url}/books"

    def list_books(self) -> List[Book]:
        resp = self._session.get(self.books_url, timeout=self.timeout)
        self._raise_for_error(resp)
        return [Book.from_dict(item) for item in resp.json()]

    def create_book(
        self,
        title: str,
        author: str,
        price: Any,
        image: Optional[ImageUpload] = None,
    ) -> Book:
        files = self._form_parts({"title": title, "author": author, "price": price}, image)
        resp = self._session.post(self.books_url, files=files, timeout=self.timeout)
        self._raise_for_error(resp)
        return Book.from_dict(resp.json())

    def update_book(
        self,
        book_id: int,
        title: str,
        author: str,
        price: Any,
        image: Optional[ImageUpload] = None,
    ) -> Book:
        files = self._form_parts(
            {"id": book_id, "title": title, "author": author, "price": price}, image
        )
        resp = self._session.put(self.books_url, files=files, timeout=self.timeout)
        self._raise_for_error(resp)
        return Book.from_dict(resp.json())

    def delete_book(self, book_id: int) -> None:
        resp = self._session.delete(
            self.books_url, params={"id": book_id}, timeout=self.timeout
        )
        self._raise_for_error(resp)

    @staticmethod
    def _form_parts(
        fields: Dict[str, Any], image: Optional[ImageUpload]
    ) -> Dict[str, tuple]:
        # (None, value) parts keep the body multipart even without a file.
        parts: Dict[str, tuple] = {
            name: (None, "" if value is None else str(value)) for name, value in fields.items()
        }
        if image is not None:
            parts["image"] = (
                image.filename,
                image.content,
                image.content_type or "application/octet-stream",
            )
        return parts

    @staticmethod
    def _raise_for_error(resp: requests.Response) -> None:
        if resp.ok:
            return
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        else:
            message = resp.text or resp.reason or "Request failed"
        logger.debug("Catalog request to %s failed with %s: %s", resp.url, resp.status_code, message)
        raise CatalogAPIError(resp.status_code, message)
