import json
import logging
import re
from pathlib import Path

from preachpoint.constants import (
    ALTERNATIVE_BOOK_NAMES,
    GUTENBERG_END_MARKER,
    KJV_BOOK_NAMES,
    NEW_TESTAMENT_FIRST_BOOK,
    NEW_TESTAMENT_LAST_BOOK,
    OLD_TESTAMENT_FIRST_BOOK,
    OLD_TESTAMENT_LAST_BOOK,
    VERSE_PATTERN,
)

logger = logging.getLogger(__name__)


def extract_testament_books_names(
    bible_text: str, first_book_name: str, last_book_name: str
) -> list[str]:
    """
    Extracts the names of books from a given bible text. The books names are assumed to be all listed and
     separated by a newline character.

    :param bible_text: The full text of the Bible.
    :param first_book_name: The name of the first book in the testament.
    :param last_book_name: The name of the last book in the testament.
    :return: A list of book names within the specified testament.
    """
    testament_books = (
        bible_text.split(first_book_name + "\n", 1)[1]
        .split(last_book_name, 1)[0]
        .split("\n")
    )
    testament_books.append(last_book_name)
    return [book for book in [first_book_name] + testament_books if len(book) > 0]


def extract_book_text(bible_text: str, book_name: str, next_book_name: str) -> str:
    return (
        bible_text.split(f"{book_name}\n\n\n")[1]
        .split(next_book_name)[0]
        .strip()
        .replace("***", "")
        .replace("The New Testament of the King James Bible", "")
        .strip()
    )


def extract_book_chapters(book_text: str) -> list[dict]:
    """
    Split a book text on its "<chapter>:<verse>" markers.

    :param book_text: Text of a single book, e.g. "1:1 In the beginning ... 1:2 And the earth ...".
    :return: Chapters as [{"chapter": 1, "verses": [{"verse": 1, "text": "..."}]}], in text order.
    """
    parts = re.split(VERSE_PATTERN, book_text)[1:]

    chapters: dict[int, list[dict]] = {}
    for i in range(0, len(parts), 2):
        chapter_number, verse_number = (int(n) for n in parts[i].split(":"))
        verse_text = " ".join(parts[i + 1].split())
        chapters.setdefault(chapter_number, []).append(
            {"verse": verse_number, "text": verse_text}
        )
    return [
        {"chapter": number, "verses": verses} for number, verses in chapters.items()
    ]


def build_kjv_document(bible_text: str) -> dict:
    """
    Build the verse store document from the Project Gutenberg King James text
    (https://www.gutenberg.org/cache/epub/10/pg10.txt).

    Gutenberg book titles are replaced by the short names of KJV_BOOK_NAMES.
    """
    old_testament_books = extract_testament_books_names(
        bible_text, OLD_TESTAMENT_FIRST_BOOK, OLD_TESTAMENT_LAST_BOOK
    )
    new_testament_books = extract_testament_books_names(
        bible_text, NEW_TESTAMENT_FIRST_BOOK, NEW_TESTAMENT_LAST_BOOK
    )
    all_books = old_testament_books + new_testament_books
    if len(all_books) != len(KJV_BOOK_NAMES):
        raise ValueError(
            f"Expected {len(KJV_BOOK_NAMES)} books in the table of contents, found {len(all_books)}"
        )

    all_books.append(GUTENBERG_END_MARKER)
    books = []
    for i, short_name in enumerate(KJV_BOOK_NAMES):
        book_name = all_books[i]
        heading = ALTERNATIVE_BOOK_NAMES.get(book_name, book_name)
        book_text = extract_book_text(bible_text, heading, all_books[i + 1])
        chapters = extract_book_chapters(book_text)
        logger.debug(f"{short_name}: {len(chapters)} chapters")
        books.append({"name": short_name, "chapters": chapters})

    return {"books": books}


def write_kjv_document(bible_text_path: str | Path, destination_path: str | Path) -> int:
    """Convert the Gutenberg text file into the JSON verse document. Returns the number of books."""
    with open(bible_text_path, "r", encoding="utf-8") as f:
        bible_text = f.read()

    document = build_kjv_document(bible_text)

    destination_path = Path(destination_path)
    destination_path.parent.mkdir(parents=True, exist_ok=True)
    with open(destination_path, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False)
    logger.info(f"saved {len(document['books'])} books to {destination_path}")
    return len(document["books"])
