"""Line-buffering state machine shared by the renderers.

Walking a Document, the renderer assembles one output line at a time.
Newline markers flush the line; blank lines are never written directly,
they only add to a count of pending line breaks that is written out just
before the next content line. That count is capped (two by default, one
after a line ending with an opening bracket, and clamped to one before a
line starting with a closing bracket), and starts at zero so the output
never begins with blank lines.

Nested blocks are rendered with the current output column as their base
column: every line they start is pre-filled with that many spaces, which
lines multi-line content up under the point it was inserted.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from codeloom.config import CLOSING_BRACKETS, OPENING_BRACKETS, RenderConfig
from codeloom.exceptions import MalformedBackReferenceError
from codeloom.models.document import Document
from codeloom.models.operations import (
    BackReference,
    NestedBlock,
    NewlineMarker,
    Operation,
    ProvenanceMarker,
    TextOperation,
)
from codeloom.models.provenance import ProvenanceToken

# Rendered output type
T = TypeVar("T")


def resolve_back_reference(
    ops: Sequence[Operation],
    index: int,
    reference: BackReference,
) -> NestedBlock:
    """Return the NestedBlock a back-reference points at.

    Args:
        ops: Sequence containing the reference
        index: Position of the reference in ops
        reference: The back-reference

    Returns:
        The referenced block from the same sequence

    Raises:
        MalformedBackReferenceError: If the offset leaves the sequence or
            does not land on a NestedBlock
    """
    target = index - reference.offset
    if reference.offset <= 0 or target < 0:
        raise MalformedBackReferenceError(index, reference.offset)
    block = ops[target]
    if not isinstance(block, NestedBlock):
        raise MalformedBackReferenceError(index, reference.offset, type(block).__name__)
    return block


class LineRenderer(ABC, Generic[T]):
    """Abstract renderer driving the line-buffering state machine.

    Subclasses own the line buffer and the output; this class decides when
    lines are flushed and how many line breaks precede them. A renderer
    instance holds the state of one render call and must not be shared
    between threads; the module-level render functions create one per call.

    Type Parameters:
        T: Rendered output type
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Line-spacing rules (defaults when None)
        """
        self.config = config or RenderConfig()
        self._reset_state()

    def _reset_state(self) -> None:
        self._pending_newlines = 0
        self._newline_cap = 0
        self._column = 0
        self._emitted = False

    def render(self, document: Document) -> T:
        """Render a Document.

        Args:
            document: Document to render (never modified)

        Returns:
            Rendered output

        Raises:
            MalformedBackReferenceError: If a back-reference is inconsistent
        """
        self._reset_state()
        self._begin()
        self._run(document.ops, 0)
        self._flush(0)
        if self.config.trailing_newline and self._emitted and self._pending_newlines:
            self._write_newlines(1)
        return self._finish()

    def _run(self, ops: Sequence[Operation], base_column: int) -> None:
        for index, op in enumerate(ops):
            if isinstance(op, NewlineMarker):
                self._flush(base_column)
                if self._pending_newlines < self._newline_cap:
                    self._pending_newlines += 1

            elif isinstance(op, TextOperation):
                self._column += len(op.text)
                self._write_text(op.text)

            elif isinstance(op, NestedBlock):
                self._enter_block(op.ops, self._column)

            elif isinstance(op, BackReference):
                block = resolve_back_reference(ops, index, op)
                self._enter_block(block.ops, self._column)

            elif isinstance(op, ProvenanceMarker):
                self._mark_provenance(op.token)

    def _enter_block(self, ops: Sequence[Operation], column: int) -> None:
        """Render a nested sequence aligned at `column`."""
        self._run(ops, column)

    def _flush(self, base_column: int) -> None:
        """Write the buffered line if it has content, then reset the buffer."""
        line = self._line_text()
        if line.strip():
            if line.lstrip().startswith(CLOSING_BRACKETS):
                self._pending_newlines = min(
                    self._pending_newlines, self.config.max_newlines_before_close
                )

            self._write_newlines(self._pending_newlines)
            self._pending_newlines = 0
            self._write_line()
            self._emitted = True

            if line.rstrip().endswith(OPENING_BRACKETS):
                self._newline_cap = self.config.max_newlines_after_open
            else:
                self._newline_cap = self.config.max_newlines

        self._column = base_column
        self._reset_line(base_column)

    # =========================================================================
    # Output hooks
    # =========================================================================

    def _begin(self) -> None:
        """Prepare the output buffers for a new render."""
        self._reset_line(0)

    def _mark_provenance(self, token: ProvenanceToken) -> None:
        """Handle a provenance marker. Ignored unless overridden."""

    @abstractmethod
    def _reset_line(self, base_column: int) -> None:
        """Start a new line buffer pre-filled with `base_column` spaces."""
        pass

    @abstractmethod
    def _line_text(self) -> str:
        """Return the plain text of the line buffer."""
        pass

    @abstractmethod
    def _write_text(self, text: str) -> None:
        """Append a text segment to the line buffer."""
        pass

    @abstractmethod
    def _write_line(self) -> None:
        """Move the line buffer to the output."""
        pass

    @abstractmethod
    def _write_newlines(self, count: int) -> None:
        """Append `count` line breaks to the output."""
        pass

    @abstractmethod
    def _finish(self) -> T:
        """Return the finished output."""
        pass
