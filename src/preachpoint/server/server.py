import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from llama_index.core.llms import LLM
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from preachpoint import __version__
from preachpoint.config import PreachPointSettings, preachpoint_settings
from preachpoint.constants import APP_DESCRIPTION, APP_TITLE
from preachpoint.helpers.cache import TTLCache
from preachpoint.helpers.extraction import PassageRange, extract_verses
from preachpoint.helpers.llm import (
    LanguageModelError,
    build_llm,
    translate_passage,
    write_commentary,
)
from preachpoint.helpers.observability import setup_observability
from preachpoint.helpers.verse_store import (
    BookNotFoundError,
    PassageError,
    PassageNotFoundError,
    VerseStore,
)

logging.basicConfig(stream=sys.stdout, level=logging.INFO)

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    books_loaded: int


class BooksResponse(BaseModel):
    books: list[str]


class ChaptersResponse(BaseModel):
    chapters: list[int]


class VersesCountResponse(BaseModel):
    verses: list[int]


class VersesResponse(BaseModel):
    text: str


class TranslationResponse(BaseModel):
    translation: str


class CommentaryRequest(PassageRange):
    tone: str | None = None
    level: str | None = None
    lang: str | None = None


class CommentaryResponse(BaseModel):
    commentary: str


def get_verse_store(request: Request) -> VerseStore:
    store = getattr(request.app.state, "verse_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Verse store not initialized.")
    return store


def get_translation_cache(request: Request) -> TTLCache:
    return request.app.state.translation_cache


def get_translation_llm(request: Request) -> LLM:
    return request.app.state.translation_llm


def get_commentary_llm(request: Request) -> LLM:
    return request.app.state.commentary_llm


def extract_passage_text(store: VerseStore, passage: PassageRange) -> str:
    """Run the extractor for a request body, mapping passage errors to HTTP 400."""
    try:
        lines = extract_verses(store, passage.book, *passage.resolved())
    except PassageError as e:
        logger.error(f"Error extracting {passage.reference()}: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    return "\n".join(lines)


def create_app(settings: PreachPointSettings | None = None) -> FastAPI:
    """Create the FastAPI application. State is loaded from `settings` at startup."""
    settings = settings or preachpoint_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Load the verse store and the models once at application startup.
        A verse document that cannot be loaded aborts the startup.
        """
        logger.info("Starting server initialization...")

        setup_observability(settings.langfuse)

        app.state.verse_store = VerseStore.from_json_file(settings.data.kjv_path)
        app.state.translation_cache = TTLCache(settings.cache.ttl_seconds)
        app.state.translation_llm = build_llm(settings.llm.translation_model)
        app.state.commentary_llm = build_llm(settings.llm.commentary_model)

        logger.info(f"Using translation LLM: {settings.llm.translation_model}")
        logger.info(f"Using commentary LLM: {settings.llm.commentary_model}")
        logger.info("Server initialization complete. Ready to accept requests.")

        yield

        logger.info("Server shutting down...")

    app = FastAPI(
        title=APP_TITLE,
        description=APP_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        messages = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"] if part != "body")
            messages.append(f"{location}: {error['msg']}" if location else error["msg"])
        return JSONResponse(status_code=400, content={"error": "; ".join(messages)})

    @app.get("/health", response_model=HealthResponse)
    async def health_check(store: VerseStore = Depends(get_verse_store)):
        """
        Health check endpoint to verify the server is running.
        """
        return HealthResponse(status="healthy", books_loaded=len(store))

    @app.get("/api/books", response_model=BooksResponse)
    async def list_books(store: VerseStore = Depends(get_verse_store)):
        return BooksResponse(books=store.book_names())

    @app.get("/api/chapters", response_model=ChaptersResponse)
    async def list_chapters(
        book: str | None = Query(default=None),
        store: VerseStore = Depends(get_verse_store),
    ):
        if not book:
            raise HTTPException(status_code=400, detail="Missing book parameter")
        try:
            return ChaptersResponse(chapters=store.chapter_numbers(book))
        except BookNotFoundError:
            raise HTTPException(status_code=404, detail=f"Book not found: {book}")

    @app.get("/api/versesCount", response_model=VersesCountResponse)
    async def list_verses(
        book: str | None = Query(default=None),
        chapter: int | None = Query(default=None, ge=1),
        store: VerseStore = Depends(get_verse_store),
    ):
        if not book or chapter is None:
            raise HTTPException(
                status_code=400, detail="Missing book or chapter parameter"
            )
        try:
            return VersesCountResponse(verses=store.verse_numbers(book, chapter))
        except PassageNotFoundError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.post("/api/verses", response_model=VersesResponse)
    async def get_verses(
        passage: PassageRange, store: VerseStore = Depends(get_verse_store)
    ):
        """
        Return the passage text, one "<chapter>:<verse> <text>" line per verse.
        """
        text = extract_passage_text(store, passage)
        return VersesResponse(text=text)

    @app.post("/api/translate", response_model=TranslationResponse)
    async def translate(
        passage: PassageRange,
        store: VerseStore = Depends(get_verse_store),
        cache: TTLCache = Depends(get_translation_cache),
        llm: LLM = Depends(get_translation_llm),
    ):
        """
        Translate the passage into Afrikaans. Translations are cached per range.
        """
        cache_key = passage.cache_key()
        cached = cache.get(cache_key)
        if cached is not None:
            logger.info(f"Translation cache hit: {cache_key}")
            return TranslationResponse(translation=cached)

        snippet = extract_passage_text(store, passage)
        try:
            translation = await translate_passage(llm, snippet)
        except LanguageModelError as e:
            logger.error(f"Error in /api/translate: {str(e)}")
            raise HTTPException(status_code=502, detail=str(e))

        cache.set(cache_key, translation)
        return TranslationResponse(translation=translation)

    @app.post("/api/commentary", response_model=CommentaryResponse)
    async def commentary(
        request: CommentaryRequest,
        store: VerseStore = Depends(get_verse_store),
        llm: LLM = Depends(get_commentary_llm),
    ):
        """
        Generate an AI commentary of the passage. Not cached.
        """
        scripture = extract_passage_text(store, request)
        try:
            text = await write_commentary(
                llm,
                reference=request.reference(),
                passage=scripture,
                tone=request.tone,
                level=request.level,
                lang=request.lang,
            )
        except LanguageModelError as e:
            logger.error(f"Error in /api/commentary: {str(e)}")
            raise HTTPException(status_code=502, detail=str(e))
        return CommentaryResponse(commentary=text)

    return app


app = create_app()
