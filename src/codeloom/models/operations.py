"""Operation entities - the atomic units of a Document.

This module contains the tagged variants a Document is made of:
- NewlineMarker: a line break
- FixedText: literal template text, never contains a newline
- OwnedText: runtime-produced text, never contains a newline
- NestedBlock: an owned sub-sequence spliced in at this point
- BackReference: repeat use of an earlier NestedBlock at the same level
- ProvenanceMarker: the call site that the following operations come from

Every nested block owns its own tuple of operations, so each nesting level is
a separate append-only sequence and back-references never cross levels.
"""

from dataclasses import dataclass
from typing import Union

from codeloom.models.provenance import ProvenanceToken


@dataclass(frozen=True)
class NewlineMarker:
    """A line break."""

    def __repr__(self) -> str:
        return "NewlineMarker()"


@dataclass(frozen=True)
class TextOperation:
    """A text segment containing no newline.

    Attributes:
        text: The segment text
    """

    text: str


@dataclass(frozen=True)
class FixedText(TextOperation):
    """Literal text taken from a template."""


@dataclass(frozen=True)
class OwnedText(TextOperation):
    """Text produced at runtime (stringified values, runtime strings)."""


@dataclass(frozen=True)
class NestedBlock:
    """A complete sub-Document embedded at this position.

    Attributes:
        ops: Operations of the embedded Document, owned by this block
    """

    ops: tuple["Operation", ...]


@dataclass(frozen=True)
class BackReference:
    """Repeat reference to an earlier NestedBlock in the same sequence.

    Attributes:
        offset: Number of operations to step back from this one
    """

    offset: int


@dataclass(frozen=True)
class ProvenanceMarker:
    """Marks that the following operations originate from a call site.

    Attributes:
        token: Call site the following operations come from
    """

    token: ProvenanceToken


Operation = Union[
    NewlineMarker,
    FixedText,
    OwnedText,
    NestedBlock,
    BackReference,
    ProvenanceMarker,
]

# Shared instance; markers carry no data
NEWLINE = NewlineMarker()
