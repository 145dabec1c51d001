"""Codeloom renderers.

- render: plain generated text
- render_debug: the same text coloured by call site, followed by a legend
"""

from codeloom.config import DebugConfig, RenderConfig
from codeloom.models.document import Document
from codeloom.provenance import ProvenanceRegistry
from codeloom.renderers.base import LineRenderer, resolve_back_reference
from codeloom.renderers.debug import DebugRenderer
from codeloom.renderers.plain import PlainRenderer


def render(document: Document, config: RenderConfig | None = None) -> str:
    """Render a Document to plain text.

    Args:
        document: Document to render
        config: Line-spacing rules

    Returns:
        Generated text
    """
    return PlainRenderer(config).render(document)


def render_debug(
    document: Document,
    config: RenderConfig | None = None,
    debug_config: DebugConfig | None = None,
    registry: ProvenanceRegistry | None = None,
) -> str:
    """Render a Document with provenance colours and a legend.

    Args:
        document: Document to render
        config: Line-spacing rules
        debug_config: Debug rendering settings
        registry: Colour registry (default: process-wide registry)

    Returns:
        ANSI-styled text followed by the legend
    """
    return DebugRenderer(config, debug_config, registry).render_string(document)


__all__ = [
    "render",
    "render_debug",
    "LineRenderer",
    "PlainRenderer",
    "DebugRenderer",
    "resolve_back_reference",
]
