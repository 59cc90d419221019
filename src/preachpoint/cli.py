"""
Command-line interface for Preach Point.

Usage:
    preachpoint health [--base-url URL]
    preachpoint books [--base-url URL]
    preachpoint chapters --book BOOK [--base-url URL]
    preachpoint passage --book BOOK --start CH:V [--end CH:V] [--translate] [--base-url URL]
    preachpoint commentary --book BOOK --start CH:V [--end CH:V] [--tone T] [--level L] [--lang en|af]
    preachpoint build-data --gutenberg-text PATH [--output PATH]
    preachpoint server [--host HOST] [--port PORT] [--reload] [--workers N]
"""

import logging

import click

from preachpoint.helpers.client import (
    get_commentary,
    get_passage,
    health_check,
    list_books,
    list_chapters,
)
from preachpoint.constants import (
    DEFAULT_COMMENTARY_LEVEL,
    DEFAULT_COMMENTARY_TONE,
    PREACHPOINT_SERVER_DEFAULT_BASE_URL,
    PREACHPOINT_SERVER_PORT,
)

logger = logging.getLogger(__name__)

BASE_URL_HELP = (
    f"Server base URL (default: env PREACHPOINT_API_URL or {PREACHPOINT_SERVER_DEFAULT_BASE_URL})"
)


def parse_reference(ctx, param, value):
    """Parse a "<chapter>:<verse>" option into a (chapter, verse) tuple."""
    if value is None:
        return None
    try:
        chapter, verse = (int(part) for part in value.split(":"))
    except ValueError:
        raise click.BadParameter("expected CHAPTER:VERSE, e.g. 3:16")
    if chapter < 1 or verse < 1:
        raise click.BadParameter("chapter and verse numbers start at 1")
    return chapter, verse


def passage_options(f):
    f = click.option(
        "--end",
        callback=parse_reference,
        help="Last CHAPTER:VERSE of the passage (default: same as --start)",
    )(f)
    f = click.option(
        "--start",
        "-s",
        required=True,
        callback=parse_reference,
        help="First CHAPTER:VERSE of the passage",
    )(f)
    f = click.option("--book", "-b", required=True, help="Book name, e.g. Genesis")(f)
    return f


@click.group()
@click.version_option()
def cli():
    """Preach Point - Bible passages with AI translation and commentary."""
    pass


@cli.command()
@click.option("--base-url", default=None, help=BASE_URL_HELP)
def health(base_url):
    """Check the health status of the Preach Point server."""
    try:
        status = health_check(base_url)
        click.echo(f"Server Status: {status.status} ({status.books_loaded} books)")
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--base-url", default=None, help=BASE_URL_HELP)
def books(base_url):
    """List the books served by the server."""
    try:
        for name in list_books(base_url):
            click.echo(name)
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--book", "-b", required=True, help="Book name, e.g. Genesis")
@click.option("--base-url", default=None, help=BASE_URL_HELP)
def chapters(book, base_url):
    """List the chapter numbers of a book."""
    try:
        numbers = list_chapters(book, base_url)
        click.echo(" ".join(str(n) for n in numbers))
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@passage_options
@click.option(
    "--translate",
    help="Return the Afrikaans translation instead of the KJV text",
    is_flag=True,
)
@click.option("--base-url", default=None, help=BASE_URL_HELP)
def passage(book, start, end, translate, base_url):
    """Print a passage, optionally translated into Afrikaans."""
    end_chapter, end_verse = end if end else (None, None)
    try:
        text = get_passage(
            book,
            start[0],
            start[1],
            end_chapter,
            end_verse,
            base_url=base_url,
            translate=translate,
        )
        click.echo(text)
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@passage_options
@click.option(
    "--tone",
    default=DEFAULT_COMMENTARY_TONE,
    help=f"Commentary tone (default: {DEFAULT_COMMENTARY_TONE})",
)
@click.option(
    "--level",
    default=DEFAULT_COMMENTARY_LEVEL,
    help=f"Explanation level (default: {DEFAULT_COMMENTARY_LEVEL})",
)
@click.option(
    "--lang",
    default="en",
    type=click.Choice(["en", "af"]),
    help="Commentary language (default: en)",
)
@click.option("--base-url", default=None, help=BASE_URL_HELP)
def commentary(book, start, end, tone, level, lang, base_url):
    """Generate an AI commentary of a passage."""
    end_chapter, end_verse = end if end else (None, None)
    try:
        text = get_commentary(
            book,
            start[0],
            start[1],
            end_chapter,
            end_verse,
            tone=tone,
            level=level,
            lang=lang,
            base_url=base_url,
        )
        click.echo(text)
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option(
    "--gutenberg-text",
    "-g",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="Project Gutenberg KJV plain text (pg10.txt)",
)
@click.option(
    "--output",
    "-o",
    default="data/kjv.json",
    type=click.Path(dir_okay=False, writable=True, path_type=str),
    help="Destination of the verse document (default: data/kjv.json)",
)
def build_data(gutenberg_text, output):
    """Build the verse document served by the server from the Gutenberg KJV text."""
    from preachpoint.helpers.data_processing import write_kjv_document

    try:
        nb_books = write_kjv_document(gutenberg_text, output)
        click.echo(f"✓ Saved {nb_books} books to {output}")
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind the server to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=PREACHPOINT_SERVER_PORT,
    type=int,
    help=f"Port to bind the server to (default: {PREACHPOINT_SERVER_PORT})",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload on code changes (for development)",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (for production, default: 1)",
)
def server(host, port, reload, workers):
    """Start the Preach Point FastAPI server."""
    try:
        import uvicorn

        click.echo(f"Starting Preach Point server on {host}:{port}...")
        if reload:
            click.echo("Auto-reload enabled (development mode)")
        if workers > 1:
            click.echo(f"Using {workers} worker processes")

        uvicorn.run(
            "preachpoint.server.server:app",
            host=host,
            port=port,
            reload=reload,
            workers=workers
            if not reload
            else 1,  # reload doesn't work with multiple workers
        )
    except ImportError:
        click.echo("Error: uvicorn is required to run the server.", err=True)
        click.echo("It should be installed with fastapi[standard].", err=True)
        raise SystemExit(1)
    except Exception as e:
        click.echo(f"Error starting server: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
