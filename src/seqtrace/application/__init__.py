"""Application layer.

- services: tracing, diagram facade, source extraction
- renderers: Mermaid and tree output
"""

from seqtrace.application.renderers import MermaidRenderer, TreeRenderer
from seqtrace.application.services import (
    CodeExtractionRequest,
    CodeExtractionResult,
    CodeExtractor,
    SequenceDiagramService,
    SequenceTracer,
)

__all__ = [
    # Services
    "SequenceTracer",
    "SequenceDiagramService",
    "CodeExtractor",
    "CodeExtractionRequest",
    "CodeExtractionResult",
    # Renderers
    "MermaidRenderer",
    "TreeRenderer",
]
