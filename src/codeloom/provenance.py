"""Provenance registry - stable per-call-site colours for debug rendering.

The registry is the only state shared between threads. It never takes a
lock: ids and colour numbers come from itertools.count (whose next() is
atomic) and slots are committed with dict.setdefault, which either stores
the claimed value or returns the value another thread committed first.
A thread that loses the race discards its claim and uses the winner's, so
each token converges to exactly one colour.

A process-wide registry is created at import time and returned by
get_registry(); renderers accept an explicit registry for isolation.
"""

import inspect
import itertools
import logging
import sys
from collections.abc import Hashable
from types import FrameType

from rich.style import Style

from codeloom.models.provenance import ProvenanceToken
from codeloom.palette import palette_style

logger = logging.getLogger(__name__)

# Token ids are unique across every registry in the process
_token_ids = itertools.count(1)


class ProvenanceRegistry:
    """Assigns tokens to call sites and colours to tokens."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._next_color = itertools.count()
        self._sites: dict[Hashable, ProvenanceToken] = {}
        self._slots: dict[ProvenanceToken, int] = {}

    # =========================================================================
    # Tokens
    # =========================================================================

    def register(self, file: str, line: int, column: int) -> ProvenanceToken:
        """Create a new token. Every call returns a distinct token."""
        return ProvenanceToken(next(_token_ids), file, line, column)

    def lookup_site(self, site: Hashable) -> ProvenanceToken | None:
        """Return the token already registered for a call site, if any."""
        return self._sites.get(site)

    def register_site(
        self,
        site: Hashable,
        file: str,
        line: int,
        column: int,
    ) -> ProvenanceToken:
        """Return the token for a call site, registering it on first use.

        Args:
            site: Hashable call-site key
            file: Source file of the site
            line: 1-based line
            column: 1-based column

        Returns:
            The token committed for this site
        """
        token = self._sites.get(site)
        if token is None:
            token = self._sites.setdefault(site, self.register(file, line, column))
        return token

    # =========================================================================
    # Colours
    # =========================================================================

    def is_assigned(self, token: ProvenanceToken) -> bool:
        """Return True once a colour has been committed for the token."""
        return token in self._slots

    def color_of(self, token: ProvenanceToken) -> int:
        """Return the palette index for a token, assigning it on first use.

        Idempotent per token and safe under concurrent first use.
        """
        slot = self._slots.get(token)
        if slot is not None:
            return slot

        claimed = next(self._next_color)
        slot = self._slots.setdefault(token, claimed)
        if slot == claimed:
            logger.debug("Assigned colour %d to %s", slot, token.location)
        else:
            logger.debug(
                "Discarded colour claim %d for %s, already committed as %d",
                claimed,
                token.location,
                slot,
            )
        return slot

    def style_of(self, token: ProvenanceToken) -> Style:
        """Return the display style for a token."""
        return palette_style(self.color_of(token))


_default_registry = ProvenanceRegistry()


def get_registry() -> ProvenanceRegistry:
    """Return the process-wide registry."""
    return _default_registry


def _frame_location(frame: FrameType) -> tuple[str, int, int]:
    """Return file, line and 1-based column of a frame's current call."""
    info = inspect.getframeinfo(frame, context=0)
    column = 1
    positions = getattr(info, "positions", None)
    if positions is not None and positions.col_offset is not None:
        column = positions.col_offset + 1
    return info.filename, info.lineno, column


def caller_provenance(
    depth: int = 1,
    registry: ProvenanceRegistry | None = None,
) -> ProvenanceToken:
    """Return the token for the call site `depth` frames above the caller.

    A call site is one instruction in one code object, so repeated calls from
    the same place share a token while two calls on the same line do not.

    Args:
        depth: Frames to skip above the function calling this one
        registry: Registry to use (default: process-wide registry)

    Returns:
        Token for the call site
    """
    registry = registry or get_registry()
    frame = sys._getframe(depth + 1)
    try:
        site = (frame.f_code, frame.f_lasti)
        token = registry.lookup_site(site)
        if token is None:
            file, line, column = _frame_location(frame)
            token = registry.register_site(site, file, line, column)
        return token
    finally:
        del frame
