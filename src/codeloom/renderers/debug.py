"""Debug renderer - generated text coloured by where each piece came from.

Every provenance marker switches the style to its token's palette colour,
and every substitution boundary adds the configured emphasis to the style
around it, so a value spliced into a template stands out even when it has
no call site of its own (strings, numbers). A compiled sub-template in a
slot switches to its own colour and keeps the emphasis. Styles are restored
when the nested sequence ends.

Output is kept as rich Segments (text plus style) so each line is written in
pieces matching the style boundaries. After the document, a legend lists
every call site seen, in its own colour, in first-seen order.
"""

import logging
from collections.abc import Sequence

from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from codeloom.config import DebugConfig, RenderConfig
from codeloom.models.document import Document
from codeloom.models.operations import Operation
from codeloom.models.provenance import ProvenanceToken
from codeloom.provenance import ProvenanceRegistry, get_registry
from codeloom.renderers.base import LineRenderer

logger = logging.getLogger(__name__)

LEGEND_TITLE_STYLE = Style(bold=True)


class DebugRenderer(LineRenderer[list[Segment]]):
    """Renders a Document to styled segments with a provenance legend.

    Attributes:
        debug_config: Legend title, colour system and boundary emphasis
        registry: Registry that assigns token colours
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        debug_config: DebugConfig | None = None,
        registry: ProvenanceRegistry | None = None,
    ) -> None:
        """Initialize the debug renderer.

        Args:
            config: Line-spacing rules
            debug_config: Debug rendering settings
            registry: Colour registry (default: process-wide registry)
        """
        super().__init__(config)
        self.debug_config = debug_config or DebugConfig()
        self.registry = registry or get_registry()

    def render_text(self, document: Document) -> Text:
        """Render a Document as a rich Text."""
        return Text.assemble(*((segment.text, segment.style) for segment in self.render(document)))

    def render_string(self, document: Document) -> str:
        """Render a Document as a string with ANSI styling."""
        color_system = self.debug_config.rich_color_system
        return "".join(
            segment.style.render(segment.text, color_system=color_system)
            if segment.style
            else segment.text
            for segment in Segment.simplify(self.render(document))
        )

    def _begin(self) -> None:
        self._segments: list[Segment] = []
        self._style = Style.null()
        self._seen: dict[ProvenanceToken, Style] = {}
        self._depth = 0
        super()._begin()

    def _enter_block(self, ops: Sequence[Operation], column: int) -> None:
        enclosing = self._style
        self._style = enclosing + self.debug_config.boundary
        self._depth += 1
        super()._enter_block(ops, column)
        self._depth -= 1
        self._style = enclosing

    def _mark_provenance(self, token: ProvenanceToken) -> None:
        style = self._seen.get(token)
        if style is None:
            style = self._seen[token] = self.registry.style_of(token)
        # a sub-template spliced into a slot keeps the boundary emphasis
        self._style = style + self.debug_config.boundary if self._depth else style

    def _reset_line(self, base_column: int) -> None:
        self._line: list[Segment] = [Segment(" " * base_column)] if base_column else []

    def _line_text(self) -> str:
        return "".join(segment.text for segment in self._line)

    def _write_text(self, text: str) -> None:
        self._line.append(Segment(text, self._style))

    def _write_line(self) -> None:
        self._segments.extend(self._line)

    def _write_newlines(self, count: int) -> None:
        if count:
            self._segments.append(Segment("\n" * count))

    def _finish(self) -> list[Segment]:
        logger.debug("Debug render saw %d provenance token(s)", len(self._seen))
        self._write_legend()
        return self._segments

    def _write_legend(self) -> None:
        if self._segments:
            if not self._segments[-1].text.endswith("\n"):
                self._segments.append(Segment("\n"))
            self._segments.append(Segment("\n"))

        self._segments.append(Segment(f"{self.debug_config.legend_title}:", LEGEND_TITLE_STYLE))
        for token, style in self._seen.items():
            self._segments.append(Segment("\n"))
            self._segments.append(Segment(token.location, style))
        self._segments.append(Segment("\n"))
