"""Diagram facade: trace an entry point and render it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seqtrace.application.renderers.mermaid import MermaidRenderer
from seqtrace.application.services.tracer import SequenceTracer
from seqtrace.domain.ports.type_index import BuildableTypeIndex

if TYPE_CHECKING:
    from seqtrace.domain.model.configuration import SequenceOutputConfig
    from seqtrace.domain.model.trace_result import TraceResult
    from seqtrace.domain.ports.renderer import DiagramRenderer
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)


class SequenceDiagramService:
    """Main facade for sequence diagrams.

    Builds the index on first use (errors propagate), traces, renders.

    Example:
        index = FileSystemTypeIndex(Path("build/snapshots"))
        service = SequenceDiagramService(index)
        config = SequenceOutputConfig(depth=3, base_packages=frozenset({"com.example."}))
        print(service.generate("com.example.OrderService.place(Order)", config))
    """

    def __init__(self, index: TypeIndexPort, renderer: DiagramRenderer | None = None) -> None:
        """Initialize service.

        Args:
            index: Type index to trace against
            renderer: Output renderer. None = MermaidRenderer over index.

        Raises:
            TypeError: If index is None
        """
        if index is None:
            raise TypeError("index must not be None")
        self._index = index
        self._tracer = SequenceTracer(index)
        self._renderer = renderer if renderer is not None else MermaidRenderer(index)

    @property
    def renderer(self) -> DiagramRenderer:
        """Renderer used by generate()."""
        return self._renderer

    def trace(self, entry_method_id: str, config: SequenceOutputConfig) -> TraceResult:
        """Trace entry point without rendering.

        Raises:
            ConfigurationError: If the index cannot be built
        """
        if isinstance(self._index, BuildableTypeIndex):
            self._index.load_or_build()
        return self._tracer.trace(entry_method_id, config)

    def generate(self, entry_method_id: str, config: SequenceOutputConfig) -> str:
        """Trace entry point and render the result.

        Args:
            entry_method_id: MethodId to start from
            config: Used for tracing and rendering

        Returns:
            Diagram text in the renderer's format

        Raises:
            ConfigurationError: If the index cannot be built
        """
        logger.info("generating %s diagram for %s", self._renderer.format_name, entry_method_id)
        result = self.trace(entry_method_id, config)
        text = self._renderer.render(result, config)
        logger.info("diagram for %s: %d lines", entry_method_id, text.count("\n"))
        return text
