"""Exception types raised by the ingestion and query paths."""

from __future__ import annotations


class DocRagError(Exception):
    """Base class for errors surfaced to callers of the core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(DocRagError):
    """The file extension is not one of the supported formats."""


class ExtractionError(DocRagError):
    """The underlying parser failed or produced no text."""


class EmptyDocumentError(ExtractionError):
    """Extraction succeeded but the document holds no text."""

    def __init__(self, message: str = "No text found in document (maybe scanned image).") -> None:
        super().__init__(message)


class EmptyQueryError(DocRagError):
    """The query text is empty or whitespace only."""

    def __init__(self, message: str = "Query cannot be empty") -> None:
        super().__init__(message)
