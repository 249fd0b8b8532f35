import subprocess
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

import httpx
import typer

from book import Book
from client import InventoryClient
from config import settings
from library import LibraryError
from utils.ui_helpers import set_output_mode, print_list_result, print_book_result

APP_NAME = "Library CLI"

app = typer.Typer(help=APP_NAME)


@contextmanager
def _api_client() -> Iterator[InventoryClient]:
    """Yield a client bound to the configured service, closing it afterwards."""
    http = httpx.Client(base_url=settings.api_base_url, timeout=settings.request_timeout)
    try:
        yield InventoryClient(http)
    finally:
        http.close()


def _fail(error: LibraryError) -> None:
    print(f"Error: {error}")
    raise typer.Exit(code=1)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, "--host", help="Interface to bind"),
    port: int = typer.Option(settings.api_port, "--port", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Start the inventory API with uvicorn."""
    print(f"Starting inventory API on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    if reload:
        args.append("--reload")
    subprocess.run(args)


@app.command("list")
def cli_list():
    """List all books."""
    with _api_client() as client:
        try:
            books = client.list_books()
        except LibraryError as e:
            _fail(e)
    print_list_result(books)


@app.command("show")
def cli_show(book_id: str):
    """Show a single book by id."""
    with _api_client() as client:
        try:
            book = client.get_book(book_id)
        except LibraryError as e:
            _fail(e)
    print_book_result(book, heading="Book Found")


@app.command("add")
def cli_add(
    book_id: str,
    title: str,
    author: str,
    quantity: int = typer.Option(1, "--quantity", "-q", help="Copies available"),
):
    """Add a book to the inventory."""
    with _api_client() as client:
        try:
            book = client.add_book(Book(id=book_id, title=title, author=author, quantity=quantity))
        except LibraryError as e:
            _fail(e)
    print(f"Successfully added: {book.title} by {book.author}")


@app.command("checkout")
def cli_checkout(book_id: str):
    """Check out one copy of a book."""
    with _api_client() as client:
        try:
            book = client.checkout_book(book_id)
        except LibraryError as e:
            _fail(e)
    print(f"Checked out: {book.title} ({book.quantity} left)")


@app.command("return")
def cli_return(book_id: str):
    """Return one copy of a book."""
    with _api_client() as client:
        try:
            book = client.return_book(book_id)
        except LibraryError as e:
            _fail(e)
    print(f"Returned: {book.title} ({book.quantity} available)")


if __name__ == "__main__":
    app()
