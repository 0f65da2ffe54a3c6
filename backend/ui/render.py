"""
HTML rendering for the catalog page.
"""
from html import escape
from typing import List, Optional

from domain.models import Book
from ui.page import CatalogPage


def _resolve_image_url(image_url: str, api_base_url: Optional[str]) -> str:
    """Uploaded covers are served by the API, so relative paths need its origin."""
    if not image_url or image_url.startswith(("http://", "https://")) or not api_base_url:
        return image_url
    return api_base_url.rstrip("/") + "/" + image_url.lstrip("/")


def _render_add_form() -> str:
    return """
        <form class="book-form" method="post" action="/add" enctype="multipart/form-data">
            <label>Title <input type="text" name="title" required></label>
            <label>Author <input type="text" name="author" required></label>
            <label>Price <input type="number" name="price" step="0.01" min="0" required></label>
            <label>Image <input type="file" name="image" accept="image/*"></label>
            <button type="submit">Add Book</button>
        </form>"""


def _render_book(book: Book, api_base_url: Optional[str]) -> str:
    cover = ""
    if book.image_url:
        src = escape(_resolve_image_url(book.image_url, api_base_url), quote=True)
        cover = f'<div class="book-cover"><img src="{src}" alt="{escape(book.title, quote=True)}"></div>'
    return f"""
            <li class="book" data-id="{book.id}">
                {cover}
                <p class="book-title">{escape(book.title)}</p>
                <p class="book-author">By {escape(book.author)}</p>
                <p class="book-price">${book.price:.2f}</p>
                <form method="post" action="/edit/{book.id}"><button type="submit">Edit</button></form>
                <form method="post" action="/delete/{book.id}"><button type="submit">Delete</button></form>
            </li>"""


def _render_edit_form(book: Book) -> str:
    return f"""
        <div class="edit-modal">
            <form class="book-form" method="post" action="/edit" enctype="multipart/form-data">
                <h3>Edit Book</h3>
                <label>Title <input type="text" name="title" value="{escape(book.title, quote=True)}"></label>
                <label>Author <input type="text" name="author" value="{escape(book.author, quote=True)}"></label>
                <label>Price <input type="number" name="price" step="0.01" value="{book.price}"></label>
                <label>Image <input type="file" name="image" accept="image/*"></label>
                <button type="submit" formaction="/cancel" formnovalidate>Cancel</button>
                <button type="submit">Save</button>
            </form>
        </div>"""


def render_page(page: CatalogPage, api_base_url: Optional[str] = None) -> str:
    """Render the whole catalog page for the current view state."""
    error_html = f'<p class="error">{escape(page.error)}</p>' if page.error else ""

    if page.books:
        items: List[str] = [_render_book(b, api_base_url) for b in page.books]
        list_html = f"<ul class=\"books\">{''.join(items)}\n        </ul>"
    else:
        list_html = '<p class="empty">No books available</p>'

    edit_html = _render_edit_form(page.editing) if page.editing else ""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Books Inventory</title>
</head>
<body>
    <h1>Books Inventory</h1>
    {error_html}
    <section>
        <h2>Add New Book</h2>
        {_render_add_form()}
    </section>
    <section>
        <h2>Available Books</h2>
        <form method="post" action="/refresh"><button type="submit">Refresh</button></form>
        {list_html}
    </section>
    {edit_html}
</body>
</html>
"""
