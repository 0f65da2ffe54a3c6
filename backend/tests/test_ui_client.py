from unittest.mock import MagicMock

import pytest
import requests

from domain.models import Book
from ui.client import CatalogAPIError, CatalogClient, ImageUpload


def _response(status=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.url = "http://api.test/books"
    resp.text = text
    resp.reason = "Reason"
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


def _client(session):
    return CatalogClient(base_url="http://api.test/", session=session, timeout=3)


def test_list_books_parses_records():
    session = MagicMock()
    session.get.return_value = _response(json_data=[
        {"id": 1, "title": "T", "author": "A", "price": 2.5, "imageUrl": ""},
        {"id": 2, "title": "U", "author": "B", "price": 3, "imageUrl": "/uploads/1-x.png"},
    ])

    books = _client(session).list_books()

    session.get.assert_called_once_with("http://api.test/books", timeout=3)
    assert books == [
        Book(id=1, title="T", author="A", price=2.5),
        Book(id=2, title="U", author="B", price=3.0, image_url="/uploads/1-x.png"),
    ]


def test_create_book_sends_multipart_fields_and_image():
    session = MagicMock()
    session.post.return_value = _response(
        status=201,
        json_data={"id": 9, "title": "T", "author": "A", "price": 1.0, "imageUrl": "/uploads/1-c.png"},
    )

    book = _client(session).create_book("T", "A", 1, ImageUpload("c.png", b"bytes", "image/png"))

    assert book.id == 9
    args, kwargs = session.post.call_args
    assert args == ("http://api.test/books",)
    assert kwargs["files"] == {
        "title": (None, "T"),
        "author": (None, "A"),
        "price": (None, "1"),
        "image": ("c.png", b"bytes", "image/png"),
    }
    assert kwargs["timeout"] == 3


def test_update_book_sends_id_without_image():
    session = MagicMock()
    session.put.return_value = _response(
        json_data={"id": 4, "title": "T2", "author": "A2", "price": 2.0, "imageUrl": "/uploads/old.png"},
    )

    book = _client(session).update_book(4, "T2", "A2", "2.0")

    assert book.image_url == "/uploads/old.png"
    files = session.put.call_args.kwargs["files"]
    assert files["id"] == (None, "4")
    assert "image" not in files


def test_delete_book_uses_query_param():
    session = MagicMock()
    session.delete.return_value = _response(json_data={"message": "Book deleted successfully"})

    _client(session).delete_book(7)

    session.delete.assert_called_once_with("http://api.test/books", params={"id": 7}, timeout=3)


def test_error_response_raises_with_server_message():
    session = MagicMock()
    session.delete.return_value = _response(status=404, json_data={"error": "Book not found"})

    with pytest.raises(CatalogAPIError) as exc_info:
        _client(session).delete_book(7)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Book not found"


def test_error_response_without_json_uses_text():
    session = MagicMock()
    session.get.return_value = _response(status=502, text="Bad gateway")

    with pytest.raises(CatalogAPIError) as exc_info:
        _client(session).list_books()

    assert exc_info.value.message == "Bad gateway"


def test_transport_errors_propagate():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(requests.ConnectionError):
        _client(session).list_books()
