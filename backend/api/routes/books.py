"""
Books API routes.

All four operations work on the single ``/books`` collection. Create and
Update take multipart forms so a cover image can ride along with the fields;
Delete takes the id as a query parameter.
"""
import logging
from io import BytesIO
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from domain.models import SEED_BOOKS, Book, BookNotFoundError
from repositories import BooksRepository
from storage.file_storage import FileStorage
from settings import settings

router = APIRouter()
books_repo = BooksRepository(seed=SEED_BOOKS if settings.SEED_BOOKS else None)
storage = FileStorage(settings.UPLOADS_DIR, settings.UPLOADS_URL_PREFIX)
logger = logging.getLogger(__name__)

INVALID_BOOK_DATA = "Invalid book data"
INVALID_ID = "Invalid ID"
BOOK_NOT_FOUND = "Book not found"


class BookForm(BaseModel):
    """Validated title/author/price submitted by the add and edit forms."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)


class BookResponse(BaseModel):
    id: int
    title: str
    author: str
    price: float
    imageUrl: str = ""


class MessageResponse(BaseModel):
    message: str


def book_to_response(book: Book) -> BookResponse:
    """Convert domain Book to API response."""
    return BookResponse(**book.to_dict())


def _parse_form(title: Optional[str], author: Optional[str], price: Optional[str]) -> BookForm:
    try:
        return BookForm(title=title, author=author, price=price.strip() if price else price)
    except ValidationError as e:
        logger.warning("Rejected book data: %s", e.errors(include_url=False))
        raise HTTPException(status_code=400, detail=INVALID_BOOK_DATA)


def _parse_id(raw: Optional[str], status_code: int = 400) -> int:
    try:
        return int((raw or "").strip())
    except ValueError:
        detail = INVALID_ID if status_code == 400 else BOOK_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=detail)


async def _store_image(image: Optional[UploadFile]) -> Optional[str]:
    """Write an uploaded image to storage; ``None`` when no file was sent."""
    if image is None or not image.filename:
        return None
    content = await image.read()
    return storage.save_upload(BytesIO(content), image.filename)


@router.get("", response_model=List[BookResponse])
async def list_books():
    """List all books in insertion order."""
    return [book_to_response(b) for b in books_repo.list_books()]


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """Create a new book, storing its cover image when one is uploaded."""
    data = _parse_form(title, author, price)
    try:
        image_url = await _store_image(image)
        book = books_repo.create_book(
            title=data.title,
            author=data.author,
            price=data.price,
            image_url=image_url or "",
        )
    except Exception:
        logger.exception("Failed to add book %r", data.title)
        raise HTTPException(status_code=500, detail="Failed to add book")

    logger.info("Added book %s (%r)", book.id, book.title)
    return book_to_response(book)


@router.put("", response_model=BookResponse)
async def update_book(
    book_id: Optional[str] = Form(None, alias="id"),
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """Replace a book's fields. Without a new image the current one is kept."""
    # An id that is not a number cannot match any book.
    parsed_id = _parse_id(book_id, status_code=404)
    if books_repo.get_book(parsed_id) is None:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    data = _parse_form(title, author, price)

    try:
        image_url = await _store_image(image)
        book = books_repo.update_book(
            parsed_id,
            title=data.title,
            author=data.author,
            price=data.price,
            image_url=image_url,
        )
    except BookNotFoundError:
        # Deleted between the lookup and the write.
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    except Exception:
        logger.exception("Failed to update book %s", parsed_id)
        raise HTTPException(status_code=500, detail="Failed to update book")

    logger.info("Updated book %s", book.id)
    return book_to_response(book)


@router.delete("", response_model=MessageResponse)
async def delete_book(book_id: Optional[str] = Query(None, alias="id")):
    """Delete a book by id. Its uploaded image stays on disk."""
    parsed_id = _parse_id(book_id)
    try:
        books_repo.delete_book(parsed_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    except Exception:
        logger.exception("Failed to delete book %s", parsed_id)
        raise HTTPException(status_code=500, detail="Failed to delete book")

    logger.info("Deleted book %s", parsed_id)
    return MessageResponse(message="Book deleted successfully")
