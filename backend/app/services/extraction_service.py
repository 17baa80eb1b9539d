import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from starlette.concurrency import run_in_threadpool

from app.services.parsing_service import ParsingService

logger = logging.getLogger(__name__)

PAGE_HEADER = "=== Page {number} ==="


def transient_filename(original_name: str) -> str:
    """Timestamp-qualified name so concurrent uploads don't overwrite each other."""
    safe_name = Path(original_name).name or "upload"
    return f"{int(time.time() * 1000)}-{safe_name}"


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove transient file %s: %s", path, e)


@asynccontextmanager
async def staged_upload(uploads_dir: Path, original_name: str, content: bytes) -> AsyncIterator[Path]:
    """
    Write an upload to transient storage and remove it on exit.

    Removal is attempted on every exit path. A failed removal is logged
    and never replaces the outcome of the body.
    """
    path = uploads_dir / transient_filename(original_name)
    try:
        await run_in_threadpool(_write, path, content)
        yield path
    finally:
        await run_in_threadpool(_remove, path)


def format_pages(pages: list[str]) -> str:
    """Concatenate page texts, each preceded by its 1-based page header."""
    return "".join(
        f"{PAGE_HEADER.format(number=i)}\n{text}\n\n"
        for i, text in enumerate(pages, start=1)
    )


async def extract_document(
    filename: str,
    content: bytes,
    uploads_dir: Path,
    parser: ParsingService,
) -> str:
    """Stage an upload, parse it and return its page-labelled text."""
    async with staged_upload(uploads_dir, filename, content) as path:
        pages = await parser.parse_pages(path)

    logger.info("Extracted %d pages from %s", len(pages), filename)
    return format_pages(pages)
