import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


class VerseStoreLoadError(Exception):
    """The verse document is missing or malformed. The server cannot start."""


class PassageError(Exception):
    """Base class for errors resolving a passage against the verse store."""


class PassageNotFoundError(PassageError):
    """A requested book or chapter does not exist."""


class BookNotFoundError(PassageNotFoundError):
    def __init__(self, book_name: str):
        self.book_name = book_name
        super().__init__(f'Book "{book_name}" not found')


class ChapterNotFoundError(PassageNotFoundError):
    def __init__(self, book_name: str, chapter: int):
        self.book_name = book_name
        self.chapter = chapter
        super().__init__(f'Chapter "{chapter}" not found in {book_name}')


class Verse(BaseModel):
    verse: int = Field(ge=1)
    text: str


class Chapter(BaseModel):
    chapter: int = Field(ge=1)
    verses: list[Verse]

    @model_validator(mode="after")
    def check_unique_verses(self) -> "Chapter":
        numbers = [v.verse for v in self.verses]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"duplicate verse numbers in chapter {self.chapter}")
        return self


class Book(BaseModel):
    name: str = Field(min_length=1)
    chapters: list[Chapter]

    @model_validator(mode="after")
    def check_unique_chapters(self) -> "Book":
        numbers = [c.chapter for c in self.chapters]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"duplicate chapter numbers in book {self.name}")
        return self


class BibleDocument(BaseModel):
    books: list[Book]

    @model_validator(mode="after")
    def check_unique_books(self) -> "BibleDocument":
        names = [b.name for b in self.books]
        if len(names) != len(set(names)):
            raise ValueError("duplicate book names")
        return self


class VerseStore:
    """
    Read-only book -> chapter -> verse index built once from a JSON document.

    Chapters and verses keep the order of the source document. Lookups go through
    dictionaries keyed by book name and chapter number, so they never depend on
    the document being sorted.
    """

    def __init__(self, document: BibleDocument):
        self._books: dict[str, Book] = {book.name: book for book in document.books}
        self._chapters: dict[str, dict[int, Chapter]] = {
            book.name: {chapter.chapter: chapter for chapter in book.chapters}
            for book in document.books
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "VerseStore":
        try:
            document = BibleDocument.model_validate(data)
        except ValidationError as e:
            raise VerseStoreLoadError(f"Invalid verse document: {e}") from e
        return cls(document)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "VerseStore":
        """
        Load the verse document from disk.

        :param path: Path to a JSON file shaped as {"books": [{"name", "chapters": [...]}]}.
        :raises VerseStoreLoadError: if the file is missing, is not valid JSON or does
            not match the expected shape.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise VerseStoreLoadError(f"Verse document not found: {path}") from e
        except json.JSONDecodeError as e:
            raise VerseStoreLoadError(f"Verse document is not valid JSON: {path}: {e}") from e

        store = cls.from_document(data)
        logger.info(f"Loaded {len(store)} books from {path}")
        return store

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book_name: str) -> bool:
        return book_name in self._books

    def book_names(self) -> list[str]:
        return list(self._books)

    def get_book(self, book_name: str) -> Book:
        try:
            return self._books[book_name]
        except KeyError:
            raise BookNotFoundError(book_name) from None

    def get_chapter(self, book_name: str, chapter: int) -> Chapter:
        chapters = self._chapters.get(book_name)
        if chapters is None:
            raise BookNotFoundError(book_name)
        try:
            return chapters[chapter]
        except KeyError:
            raise ChapterNotFoundError(book_name, chapter) from None

    def chapter_numbers(self, book_name: str) -> list[int]:
        return [c.chapter for c in self.get_book(book_name).chapters]

    def verse_numbers(self, book_name: str, chapter: int) -> list[int]:
        return [v.verse for v in self.get_chapter(book_name, chapter).verses]
