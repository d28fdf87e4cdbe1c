"""Text extraction — thin wrappers around LangChain document loaders."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

from langchain_community.document_loaders import (
    Docx2txtLoader,
    PyPDFLoader,
    TextLoader,
)

from docrag.errors import EmptyDocumentError, ExtractionError, UnsupportedFormatError

SUPPORTED_EXTENSIONS = frozenset({".txt", ".pdf", ".docx"})

_BLANK_LINES = re.compile(r"\n{2,}")


def _build_loader(path: Path, ext: str):
    if ext == ".pdf":
        return PyPDFLoader(str(path))
    if ext == ".docx":
        return Docx2txtLoader(str(path))
    return TextLoader(str(path), encoding="utf-8")


def extract_text(path: str | Path) -> str:
    """Return the plain text of a ``.txt``, ``.pdf`` or ``.docx`` file.

    Parameters
    ----------
    path:
        Location of the file on disk.

    Raises
    ------
    UnsupportedFormatError
        The extension is not in :data:`SUPPORTED_EXTENSIONS`.
    ExtractionError
        The loader raised while reading or parsing the file.
    EmptyDocumentError
        The file parsed but contains no text (e.g. a scanned PDF).
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(f"Unsupported file type: {ext or '<none>'}")

    try:
        pages = _build_loader(path, ext).load()
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text from file: {exc}") from exc

    text = "\n".join(page.page_content for page in pages if page.page_content)
    if not text.strip():
        raise EmptyDocumentError()
    return text


def clean_text(text: str) -> str:
    """Collapse runs of blank lines into a single newline and trim."""
    return _BLANK_LINES.sub("\n", text).strip()


def iter_supported_files(directory: str | Path, glob: str = "**/*") -> Iterator[Path]:
    """Yield supported files under *directory* in a stable (sorted) order."""
    for path in sorted(Path(directory).glob(glob)):
        if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
            yield path
