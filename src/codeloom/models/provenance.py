"""Provenance token entity.

A token identifies one template call site. Equality and hashing use only the
registration id, so two call sites that happen to share file, line and column
still produce distinct tokens.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProvenanceToken:
    """Identity of a template compilation site.

    Tokens are created by a ProvenanceRegistry and live for the whole process.
    The colour slot is not stored here; the registry owns it.

    Attributes:
        id: Process-unique registration id
        file: Source file of the call site
        line: 1-based line of the call site
        column: 1-based column of the call site
    """

    id: int
    file: str = field(compare=False)
    line: int = field(compare=False)
    column: int = field(compare=False)

    @property
    def location(self) -> str:
        """Return the call site as file:line:column."""
        return f"{self.file}:{self.line}:{self.column}"

    def __str__(self) -> str:
        return self.location
