"""seqtrace - bounded sequence traces over resolved AST snapshots."""

__version__ = "0.1.0"

from seqtrace.application.renderers.mermaid import MermaidRenderer
from seqtrace.application.services.diagram import SequenceDiagramService
from seqtrace.application.services.tracer import SequenceTracer
from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.infrastructure.adapters.type_index import FileSystemTypeIndex

__all__ = [
    "FileSystemTypeIndex",
    "MermaidRenderer",
    "SequenceDiagramService",
    "SequenceOutputConfig",
    "SequenceTracer",
    "__version__",
]
