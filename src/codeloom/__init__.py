"""Codeloom - compositional code generation templates.

Codeloom turns template strings with `$name` placeholders into Documents,
composes Documents into larger ones, and renders them back to text with
consistent indentation and spacing however deeply they are nested.

Core pieces:
- code(): compile a template at the caller's source location
- Document: composable, immutable-by-default operation tree
- render() / render_debug(): plain and provenance-coloured output
"""

__version__ = "0.1.0"
__author__ = "Codeloom Contributors"

from codeloom.adapters import DocumentConvertible, to_document
from codeloom.compiler import code, compile_template, find_placeholders
from codeloom.exceptions import (
    CodeloomError,
    MalformedBackReferenceError,
    UnresolvedPlaceholderError,
)
from codeloom.models import Document, ProvenanceToken
from codeloom.renderers import render, render_debug

__all__ = [
    "code",
    "compile_template",
    "find_placeholders",
    "to_document",
    "render",
    "render_debug",
    "Document",
    "DocumentConvertible",
    "ProvenanceToken",
    "CodeloomError",
    "UnresolvedPlaceholderError",
    "MalformedBackReferenceError",
]
