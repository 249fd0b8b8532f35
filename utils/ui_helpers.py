import os
import json
from typing import List, Any
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.cli_output).lower()

def _book_dict(book: Any) -> dict:
    return {
        "id": getattr(book, "id", ""),
        "title": getattr(book, "title", ""),
        "author": getattr(book, "author", ""),
        "quantity": getattr(book, "quantity", 0),
    }

def print_list_result(books: List[Any]) -> None:
    """Print the book list in the current output mode.
    - plain: 'ID - Title by Author (quantity: N)' lines, or 'No books in library.'
    - json: JSON array of book objects
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([_book_dict(b) for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Quantity", justify="right")
        for b in books:
            d = _book_dict(b)
            table.add_row(str(d["id"]), d["title"], d["author"], str(d["quantity"]))
        _console.print(table)
    else:
        for b in books:
            d = _book_dict(b)
            print(f"{d['id']} - {d['title']} by {d['author']} (quantity: {d['quantity']})")

def print_book_result(book: Any, heading: str = "Book") -> None:
    """Print a single book in the current output mode."""
    mode = get_output_mode()
    d = _book_dict(book)

    if mode == "json":
        print(json.dumps(d, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]ID:[/] {d['id']}\n[bold]Title:[/] {d['title']}\n"
            f"[bold]Author:[/] {d['author']}\n[bold]Quantity:[/] {d['quantity']}"
        )
        _console.print(Panel.fit(content, title=heading, border_style="blue"))
    else:
        print(heading)
        print(f"ID: {d['id']}")
        print(f"Title: {d['title']}")
        print(f"Author: {d['author']}")
        print(f"Quantity: {d['quantity']}")
