"""Conversion of values into Documents.

Anything passed as a template argument goes through to_document():
- Document: used as is
- bool: the literal "true" or "false"
- int / float: decimal string form
- str: dedented and split into lines like a template, without placeholder
  scanning (a `$` in a runtime string is plain text)
- objects with a to_document() method (DocumentConvertible)
"""

from typing import Any, Protocol, runtime_checkable

from codeloom.compiler import build_operations
from codeloom.exceptions import ConversionError
from codeloom.models.document import Document
from codeloom.models.operations import FixedText, OwnedText


@runtime_checkable
class DocumentConvertible(Protocol):
    """Capability of types that can be used as template arguments."""

    def to_document(self) -> Document:
        """Return this value as a Document."""
        ...


def from_string(text: str) -> Document:
    """Convert a runtime string, normalizing indentation like a template."""
    return Document(build_operations(text, None, None, OwnedText))


def to_document(value: Any) -> Document:
    """Convert a value into a Document.

    Args:
        value: Document, bool, int, float, str or DocumentConvertible

    Returns:
        Document for the value

    Raises:
        ConversionError: If the value has no Document form
    """
    if isinstance(value, Document):
        return value

    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return Document([FixedText("true" if value else "false")])

    if isinstance(value, (int, float)):
        return Document([OwnedText(str(value))])

    if isinstance(value, str):
        return from_string(value)

    if isinstance(value, DocumentConvertible):
        document = value.to_document()
        if not isinstance(document, Document):
            raise ConversionError(value)
        return document

    raise ConversionError(value)
