"""Template compiler - turns a template string into a Document.

A template is dedented by its smallest non-blank indent, split into lines,
and each line is scanned for `$name` placeholders. The first reference to
an argument moves its Document into a NestedBlock; later references to the
same argument become BackReferences to that block, so repeated values are
stored once.

Example:
    doc = code('''
        if ($cond) {
            $body
        }
        ''', cond="x == 5", body=body)
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from codeloom.exceptions import UnresolvedPlaceholderError
from codeloom.models.document import Document
from codeloom.models.operations import (
    NEWLINE,
    BackReference,
    FixedText,
    NestedBlock,
    Operation,
    ProvenanceMarker,
    TextOperation,
)
from codeloom.models.provenance import ProvenanceToken
from codeloom.provenance import caller_provenance

logger = logging.getLogger(__name__)

# `$` followed by the longest run of ASCII letters, digits and underscores.
# An empty run is still a placeholder (with an empty name) and never resolves.
PLACEHOLDER_PATTERN = re.compile(r"\$([A-Za-z0-9_]*)")

TextFactory = Callable[[str], TextOperation]

ArgumentsInput = Mapping[str, Any] | Iterable[tuple[str, Any]]


@dataclass
class SubstitutionArgument:
    """One named argument bound for a single compile call.

    Attributes:
        name: Placeholder name
        value: Document to splice in; None once moved into a NestedBlock
        consumed: True after the first reference
        position: Index of the NestedBlock holding the value
    """

    name: str
    value: Document | None
    consumed: bool = False
    position: int = 0

    def reference(self, ops: list[Operation]) -> None:
        """Append the operation for one reference to this argument."""
        if not self.consumed:
            self.position = len(ops)
            ops.append(NestedBlock(self.value.ops))
            self.value = None
            self.consumed = True
        else:
            ops.append(BackReference(len(ops) - self.position))


def min_indent(template: str) -> int:
    """Return the smallest leading-whitespace width of any non-blank line.

    Blank (whitespace-only) lines are ignored; a template with no content
    has an indent of 0.
    """
    widths = [
        len(line) - len(line.lstrip())
        for line in template.split("\n")
        if line.strip()
    ]
    return min(widths, default=0)


def find_placeholders(template: str) -> list[str]:
    """Return the placeholder names of a template in first-use order."""
    names: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def _bind_arguments(arguments: ArgumentsInput) -> dict[str, SubstitutionArgument]:
    """Convert caller arguments into per-call substitution state.

    When a name is supplied twice, the first value wins.
    """
    from codeloom.adapters import to_document

    items = arguments.items() if isinstance(arguments, Mapping) else arguments
    bound: dict[str, SubstitutionArgument] = {}
    for name, value in items:
        if name not in bound:
            bound[name] = SubstitutionArgument(name=name, value=to_document(value))
    return bound


def build_operations(
    template: str,
    provenance: ProvenanceToken | None,
    arguments: dict[str, SubstitutionArgument] | None,
    text_op: TextFactory,
) -> list[Operation]:
    """Compile a template into an operation list.

    Args:
        template: Template text
        provenance: Call site to mark the output with, if any
        arguments: Bound arguments; None disables placeholder scanning
        text_op: Factory for literal text segments

    Returns:
        Operation list for one Document

    Raises:
        UnresolvedPlaceholderError: If a placeholder has no argument
    """
    ops: list[Operation] = []
    if provenance is not None:
        ops.append(ProvenanceMarker(provenance))

    indent = min_indent(template)

    # split() rather than splitlines() so a final "\n" yields a trailing
    # empty segment and therefore a final newline marker
    for index, line in enumerate(template.split("\n")):
        if index:
            ops.append(NEWLINE)

        if len(line) >= indent:
            line = line[indent:]
        line = line.rstrip()
        if not line:
            continue

        if arguments is not None:
            cursor = 0
            for match in PLACEHOLDER_PATTERN.finditer(line):
                if match.start() > cursor:
                    ops.append(text_op(line[cursor : match.start()]))
                cursor = match.end()

                name = match.group(1)
                argument = arguments.get(name)
                if argument is None:
                    raise UnresolvedPlaceholderError(name, template, provenance)
                argument.reference(ops)
            line = line[cursor:]

        if line:
            ops.append(text_op(line))

    return ops


def compile_template(
    template: str,
    provenance: ProvenanceToken | None = None,
    arguments: ArgumentsInput | None = None,
) -> Document:
    """Compile a template with named arguments into a Document.

    Arguments are bound once per call. Supplying an argument that the
    template never references is allowed.

    Args:
        template: Template text with `$name` placeholders
        provenance: Call site token for debug rendering
        arguments: Mapping or (name, value) pairs; values are converted with
            to_document(). None compiles the text without placeholder scanning.

    Returns:
        Compiled Document

    Raises:
        UnresolvedPlaceholderError: If a placeholder has no matching argument
    """
    bound = None if arguments is None else _bind_arguments(arguments)
    ops = build_operations(template, provenance, bound, FixedText)

    if bound:
        unused = [name for name, argument in bound.items() if not argument.consumed]
        for name in unused:
            logger.debug("Argument %r supplied but never referenced", name)

    logger.debug(
        "Compiled template%s: %d operations, %d arguments",
        f" at {provenance.location}" if provenance is not None else "",
        len(ops),
        len(bound or ()),
    )
    return Document(ops)


def code(template: str, /, **arguments: Any) -> Document:
    """Compile a template at the caller's source location.

    The caller's file, line and column become the Document's provenance,
    shown by render_debug().

    Args:
        template: Template text with `$name` placeholders
        **arguments: Values for the placeholders (anything to_document() accepts)

    Returns:
        Compiled Document

    Raises:
        UnresolvedPlaceholderError: If a placeholder has no matching argument
    """
    provenance = caller_provenance(depth=1)
    return compile_template(template, provenance, arguments)
