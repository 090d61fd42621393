"""Errors raised while reading or merging tree documents."""

from __future__ import annotations


class DocumentError(ValueError):
    """Base class for documents that cannot be imported."""


class MalformedDocumentError(DocumentError):
    """Raised when raw text is not syntactically valid JSON."""


class InvalidDocumentShapeError(DocumentError):
    """Raised when decoded data lacks the minimal domain/competencies shape."""


class InvalidNodeValueError(ValueError):
    """Raised mid-import when a node carries an unknown enumerated value."""

    def __init__(self, message: str, *, value: object) -> None:
        super().__init__(message)
        self.value = value
