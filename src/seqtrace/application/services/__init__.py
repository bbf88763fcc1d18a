"""Application services.

SequenceDiagramService is the main facade: trace an entry point and
render it.
"""

from seqtrace.application.services.diagram import SequenceDiagramService
from seqtrace.application.services.extractor import (
    CodeExtractionRequest,
    CodeExtractionResult,
    CodeExtractor,
)
from seqtrace.application.services.tracer import SequenceTracer

__all__ = [
    "CodeExtractionRequest",
    "CodeExtractionResult",
    "CodeExtractor",
    "SequenceDiagramService",
    "SequenceTracer",
]
