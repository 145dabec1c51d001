"""Exception types raised by Codeloom.

Both template errors are programmer mistakes rather than data errors: they
abort the build of a Document and are never retried or degraded.

- UnresolvedPlaceholderError: a `$name` with no matching argument
- MalformedBackReferenceError: a repeat-reference that does not land on a
  nested block at the same level (internal consistency failure)
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from codeloom.models.provenance import ProvenanceToken


class CodeloomError(Exception):
    """Base class for every error raised by Codeloom."""


class TemplateError(CodeloomError):
    """Raised when a Document cannot be built from a template."""


class UnresolvedPlaceholderError(TemplateError):
    """Raised when a template references a name with no supplied argument."""

    def __init__(
        self,
        name: str,
        template: str | None = None,
        provenance: "ProvenanceToken | None" = None,
    ) -> None:
        self.name = name
        self.template = template
        self.provenance = provenance
        message = f"No argument provided for substitution ${name}"
        if provenance is not None:
            message += f" (template at {provenance.location})"
        super().__init__(message)


class MalformedBackReferenceError(CodeloomError):
    """Raised when a back-reference does not resolve to a nested block."""

    def __init__(self, index: int, offset: int, found: str | None = None) -> None:
        self.index = index
        self.offset = offset
        self.found = found
        message = f"Back-reference at operation {index} with offset {offset}"
        if found is None:
            message += " does not point backward into its sequence"
        else:
            message += f" points at {found}, expected a nested block"
        super().__init__(message)


class ConversionError(CodeloomError, TypeError):
    """Raised when a value cannot be converted into a Document."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Cannot convert {type(value).__name__} to a Document; "
            "implement to_document() to make it usable as an argument"
        )


class ConfigError(CodeloomError, ValueError):
    """Raised when configuration values are invalid."""
