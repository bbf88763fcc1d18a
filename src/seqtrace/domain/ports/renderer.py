"""Diagram renderer port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from seqtrace.domain.model.configuration import SequenceOutputConfig
    from seqtrace.domain.model.trace_result import TraceResult


class DiagramRenderer(Protocol):
    """Contract for trace renderers.

    Output is str, not print(). Caller decides destination.
    Renderers re-apply config.filter, so a trace can be rendered with a
    different filter than it was traced with.
    """

    @property
    def format_name(self) -> str:
        """Human readable output format name (e.g., "Mermaid")."""
        ...

    def render(self, result: TraceResult, config: SequenceOutputConfig) -> str:
        """Render trace result as text.

        Args:
            result: Trace tree to render
            config: Render-time configuration (filter, detail flags)

        Returns:
            Diagram text
        """
        ...
