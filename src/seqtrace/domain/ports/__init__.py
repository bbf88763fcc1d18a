"""Domain ports: contracts implemented by infrastructure and application."""

from seqtrace.domain.ports.renderer import DiagramRenderer
from seqtrace.domain.ports.trace_filter import ExcludeNothing, TraceFilter
from seqtrace.domain.ports.type_index import BuildableTypeIndex, TypeIndexPort

__all__ = ["BuildableTypeIndex", "DiagramRenderer", "ExcludeNothing", "TraceFilter", "TypeIndexPort"]
