from pydantic import BaseModel, ConfigDict, Field

from preachpoint.helpers.verse_store import PassageError, VerseStore


class EmptySelectionError(PassageError):
    """A syntactically valid range that selects no verse."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"No verses found in range {reference}")


class PassageRange(BaseModel):
    """Passage selection as sent by the browser UI.

    ``end_chapter`` and ``end_verse`` are optional; ``None`` means "same as the start".
    """

    model_config = ConfigDict(populate_by_name=True)

    book: str = Field(min_length=1)
    start_chapter: int = Field(ge=1, alias="startChapter")
    start_verse: int = Field(ge=1, alias="startVerse")
    end_chapter: int | None = Field(default=None, ge=1, alias="endChapter")
    end_verse: int | None = Field(default=None, ge=1, alias="endVerse")

    def resolved(self) -> tuple[int, int, int, int]:
        end_chapter = self.start_chapter if self.end_chapter is None else self.end_chapter
        end_verse = self.start_verse if self.end_verse is None else self.end_verse
        return self.start_chapter, self.start_verse, end_chapter, end_verse

    def reference(self) -> str:
        return f"{self.book} {format_range(*self.resolved())}"

    def cache_key(self) -> str:
        return f"{self.book}.{format_range(*self.resolved())}"


def format_range(
    start_chapter: int, start_verse: int, end_chapter: int, end_verse: int
) -> str:
    return f"{start_chapter}:{start_verse}-{end_chapter}:{end_verse}"


def extract_verses(
    store: VerseStore,
    book_name: str,
    start_chapter: int,
    start_verse: int,
    end_chapter: int | None = None,
    end_verse: int | None = None,
) -> list[str]:
    """
    Resolve a chapter/verse range of a book into "<chapter>:<verse> <text>" lines.

    The start and end chapters are truncated at start_verse and end_verse, interior
    chapters contribute all their verses. Within a single chapter the range is
    [start_verse, end_verse]. Verses are returned in chapter then verse number order.

    :param store: The verse store to read from.
    :param book_name: Exact (case-sensitive) book name.
    :param start_chapter: First chapter of the range.
    :param start_verse: First verse of the range within start_chapter.
    :param end_chapter: Last chapter of the range, defaults to start_chapter.
    :param end_verse: Last verse of the range within end_chapter, defaults to start_verse.
    :return: The selected verses, never empty.
    :raises BookNotFoundError: if the book does not exist.
    :raises ChapterNotFoundError: if any chapter of the range does not exist.
    :raises EmptySelectionError: if the range selects no verse.
    """
    if end_chapter is None:
        end_chapter = start_chapter
    if end_verse is None:
        end_verse = start_verse

    book = store.get_book(book_name)

    # validate every chapter before producing anything
    chapters = []
    for chapter_number in range(start_chapter, end_chapter + 1):
        chapters.append(store.get_chapter(book.name, chapter_number))

    lines = []
    for chapter in chapters:
        number = chapter.chapter
        if start_chapter == end_chapter:
            low, high = start_verse, end_verse
        elif number == start_chapter:
            low, high = start_verse, None
        elif number == end_chapter:
            low, high = None, end_verse
        else:
            low, high = None, None

        selected = [
            v
            for v in chapter.verses
            if (low is None or v.verse >= low) and (high is None or v.verse <= high)
        ]
        for verse in sorted(selected, key=lambda v: v.verse):
            lines.append(f"{number}:{verse.verse} {verse.text}")

    if not lines:
        raise EmptySelectionError(
            f"{book_name} {format_range(start_chapter, start_verse, end_chapter, end_verse)}"
        )

    return lines
