"""Codeloom data models.

This module exports the core entities:
- Document: ordered operation sequence representing generated text
- ProvenanceToken: identity of a template call site
- Operation variants: NewlineMarker, FixedText, OwnedText, NestedBlock,
  BackReference, ProvenanceMarker
"""

from codeloom.models.document import Document
from codeloom.models.operations import (
    NEWLINE,
    BackReference,
    FixedText,
    NestedBlock,
    NewlineMarker,
    Operation,
    OwnedText,
    ProvenanceMarker,
    TextOperation,
)
from codeloom.models.provenance import ProvenanceToken

__all__ = [
    "Document",
    "ProvenanceToken",
    "Operation",
    "NEWLINE",
    "NewlineMarker",
    "TextOperation",
    "FixedText",
    "OwnedText",
    "NestedBlock",
    "BackReference",
    "ProvenanceMarker",
]
