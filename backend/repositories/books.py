"""
Book repository backed by an in-memory list.

The list lives for the lifetime of the process. Every read copies it and
every mutation happens under one lock, so callers never observe a
half-applied change.
"""
import copy
import threading
from typing import Iterable, List, Optional

from domain.models import SEED_BOOKS, Book, BookIdGenerator, BookNotFoundError


class BooksRepository:
    """CRUD operations for books."""

    def __init__(
        self,
        seed: Optional[Iterable[Book]] = SEED_BOOKS,
        id_generator: Optional[BookIdGenerator] = None,
    ):
        self._lock = threading.Lock()
        self._books: List[Book] = [copy.copy(b) for b in (seed or ())]
        start = max((b.id for b in self._books), default=0)
        self._ids = id_generator or BookIdGenerator(start=start)

    def list_books(self) -> List[Book]:
        with self._lock:
            return [copy.copy(b) for b in self._books]

    def get_book(self, book_id: int) -> Optional[Book]:
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                return None
            return copy.copy(self._books[index])

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def create_book(self, title: str, author: str, price: float, image_url: str = "") -> Book:
        book = Book(
            id=self._ids.next_id(),
            title=title,
            author=author,
            price=price,
            image_url=image_url,
        )
        with self._lock:
            self._books.append(book)
        return copy.copy(book)

    def update_book(
        self,
        book_id: int,
        title: str,
        author: str,
        price: float,
        image_url: Optional[str] = None,
    ) -> Book:
        """Replace title/author/price; ``image_url=None`` keeps the current image."""
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id)
            current = self._books[index]
            updated = Book(
                id=current.id,
                title=title,
                author=author,
                price=price,
                image_url=current.image_url if image_url is None else image_url,
            )
            self._books[index] = updated
            return copy.copy(updated)

    def delete_book(self, book_id: int) -> Book:
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id)
            return copy.copy(self._books.pop(index))

    def _index_of(self, book_id: int) -> Optional[int]:
        for i, book in enumerate(self._books):
            if book.id == book_id:
                return i
        return None
