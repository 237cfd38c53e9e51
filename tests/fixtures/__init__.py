"""Shared schema fixtures for the rowsmith test suite."""

from .schema import Author, Book, authors, books, metadata

__all__ = ["Author", "Book", "authors", "books", "metadata"]
