"""
View state for the catalog page.

``CatalogPage`` holds what the user sees (the book list, an error banner and
the book being edited) and turns user actions into endpoint calls. Responses
are merged into the local list as-is; nothing is re-fetched after a
mutation, so the list only resyncs with the server on ``load()``.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from domain.models import Book
from ui.client import CatalogAPIError, CatalogClient, ImageUpload

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load books"

# Failures a single action can hit; each is logged and leaves state unchanged.
_CALL_ERRORS = (CatalogAPIError, requests.RequestException, ValueError, KeyError)


class CatalogPage:
    def __init__(self, client: CatalogClient):
        self.client = client
        self.books: List[Book] = []
        self.error: str = ""
        self.editing: Optional[Book] = None
        self.loaded = False

    def load(self) -> bool:
        """Fetch the full list, replacing local state."""
        self.loaded = True
        try:
            books = self.client.list_books()
        except _CALL_ERRORS as e:
            logger.error("Failed to load books: %s", e)
            self.books = []
            self.error = LOAD_ERROR
            return False
        self.books = books
        self.error = ""
        return True

    def add(self, title: str, author: str, price: Any, image: Optional[ImageUpload] = None) -> bool:
        try:
            added = self.client.create_book(title, author, price, image)
        except _CALL_ERRORS as e:
            logger.error("Failed to add book: %s", e)
            return False
        self.books = [*self.books, added]
        return True

    def start_edit(self, book_id: int) -> bool:
        self.editing = next((b for b in self.books if b.id == book_id), None)
        return self.editing is not None

    def cancel_edit(self) -> None:
        self.editing = None

    def submit_edit(
        self, title: str, author: str, price: Any, image: Optional[ImageUpload] = None
    ) -> bool:
        if self.editing is None:
            return False
        try:
            updated = self.client.update_book(self.editing.id, title, author, price, image)
        except _CALL_ERRORS as e:
            logger.error("Failed to update book %s: %s", self.editing.id, e)
            return False
        self.books = [updated if b.id == updated.id else b for b in self.books]
        self.editing = None
        return True

    def delete(self, book_id: int) -> bool:
        try:
            self.client.delete_book(book_id)
        except _CALL_ERRORS as e:
            logger.error("Failed to delete book %s: %s", book_id, e)
            return False
        self.books = [b for b in self.books if b.id != book_id]
        if self.editing is not None and self.editing.id == book_id:
            self.editing = None
        return True
