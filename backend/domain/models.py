"""
Core domain models for the bookstore inventory.
These are framework-agnostic and can be used by both the API and the UI.
"""
from dataclasses import dataclass
import threading
import time
from typing import Any, Callable, Dict, Optional


class BookNotFoundError(LookupError):
    """Raised when no held book matches the requested id."""

    def __init__(self, book_id: int):
        super().__init__(f"Book not found: {book_id}")
        self.book_id = book_id


@dataclass
class Book:
    """
    A single inventory record.

    ``image_url`` is either a path under the uploads prefix, an external URL
    (seeded records) or an empty string when the book has no cover.
    """
    id: int
    title: str
    author: str
    price: float
    image_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "price": self.price,
            "imageUrl": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            author=str(data.get("author") or ""),
            price=float(data.get("price") or 0.0),
            image_url=str(data.get("imageUrl") or ""),
        )


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class BookIdGenerator:
    """
    Mints millisecond-timestamp ids that are strictly increasing.

    Two requests in the same millisecond get consecutive ids instead of
    colliding.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None, start: int = 0):
        self._clock = clock or _now_ms
        self._last = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = self._clock()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


# Records every fresh store starts with.
SEED_BOOKS = (
    Book(
        id=1,
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        price=10.99,
        image_url="https://media.glamour.com/photos/56e1f3c462b398fa64cbd304/master/w_1600%2Cc_limit/entertainment-2016-02-18-main.jpg",
    ),
    Book(
        id=2,
        title="1984",
        author="George Orwell",
        price=8.99,
        image_url="https://m.media-amazon.com/images/I/91O8Zn2YZUL._AC_UF894,1000_QL80_.jpg",
    ),
)
