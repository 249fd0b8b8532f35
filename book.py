from __future__ import annotations


class Book:
    """Represents a single book record in the inventory."""

    def __init__(self, id: str, title: str, author: str, quantity: int = 0) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.quantity = quantity

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ID: {self.id}, quantity: {self.quantity})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, quantity={self.quantity!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable record

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "author": self.author, "quantity": self.quantity}

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # Absent fields take zero values, mirroring how the HTTP body is bound.
        return Book(
            id=data.get("id", ""),
            title=data.get("title", ""),
            author=data.get("author", ""),
            quantity=data.get("quantity", 0),
        )
