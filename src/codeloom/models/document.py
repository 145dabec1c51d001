"""Document entity - the intermediate representation of generated text.

A Document is an ordered sequence of operations. It is only ever changed by
appending whole sequences; nested content is moved into NestedBlock tuples
when a Document is substituted into a template, so a finished Document can be
shared read-only across threads.
"""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from codeloom.models.operations import Operation

if TYPE_CHECKING:
    from rich.text import Text

    from codeloom.config import DebugConfig, RenderConfig
    from codeloom.provenance import ProvenanceRegistry


class Document:
    """Tree-shaped representation of generated text.

    Use str() or render() for plain output and render_debug() for the
    provenance-coloured form. Printing a Document to a rich console shows the
    coloured form.

    Example:
        fields = Document.from_sequence(
            code("$ty $name;\\n", ty=ty, name=name) for ty, name in pairs
        )
        struct = code("struct $name {\\n    $fields\\n};\\n", name="peaches", fields=fields)
        print(struct)
    """

    __slots__ = ("_ops",)

    def __init__(self, ops: Iterable[Operation] = ()) -> None:
        """Initialize a Document.

        Args:
            ops: Operations making up the Document
        """
        self._ops: list[Operation] = list(ops)

    @classmethod
    def empty(cls) -> "Document":
        """Create a Document containing no operations."""
        return cls()

    @classmethod
    def from_sequence(cls, items: Iterable[Any]) -> "Document":
        """Fold convertible items into one Document.

        The first item is the base and the rest are appended in order. An
        empty sequence yields an empty Document.

        Args:
            items: Documents or any values accepted by to_document()

        Returns:
            New Document holding the concatenation
        """
        from codeloom.adapters import to_document

        iterator = iter(items)
        document = cls.empty()
        for first in iterator:
            document = cls(to_document(first).ops)
            break
        for item in iterator:
            document.append(to_document(item))
        return document

    @property
    def ops(self) -> tuple[Operation, ...]:
        """Return the operations as an immutable tuple."""
        return tuple(self._ops)

    def append(self, other: "Document") -> "Document":
        """Append another Document's operations to this one.

        No rendering or validation happens; back-references are relative, so
        they stay valid after the move.

        Args:
            other: Document to append

        Returns:
            This Document, for chaining
        """
        self._ops.extend(other._ops)
        return self

    def extend(self, value: Any) -> "Document":
        """Append any convertible value.

        Args:
            value: Document or value accepted by to_document()

        Returns:
            This Document, for chaining
        """
        from codeloom.adapters import to_document

        return self.append(to_document(value))

    def render(self, config: "RenderConfig | None" = None) -> str:
        """Render to plain text."""
        from codeloom.renderers import render

        return render(self, config)

    def render_debug(
        self,
        config: "RenderConfig | None" = None,
        debug_config: "DebugConfig | None" = None,
        registry: "ProvenanceRegistry | None" = None,
    ) -> str:
        """Render with provenance colours and a legend."""
        from codeloom.renderers import render_debug

        return render_debug(self, config, debug_config, registry)

    def __add__(self, other: Any) -> "Document":
        from codeloom.adapters import to_document

        return Document([*self._ops, *to_document(other).ops])

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Document({self.render()!r})"

    def __rich__(self) -> "Text":
        from codeloom.renderers.debug import DebugRenderer

        return DebugRenderer().render_text(self)
