"""Domain model: snapshot data, trace tree and configuration."""

from seqtrace.domain.model.annotation import AnnotationInfo
from seqtrace.domain.model.call_site import CallSiteNode
from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.domain.model.diagram_node import (
    ControlFlowFragment,
    DiagramNode,
    Interaction,
    iter_interactions,
    start_line_of,
)
from seqtrace.domain.model.enums import FragmentKind, TypeKind
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_declaration import MethodDeclaration
from seqtrace.domain.model.trace_result import TraceResult
from seqtrace.domain.model.type_ast_data import TypeAstData

__all__ = [
    "AnnotationInfo",
    "CallSiteNode",
    "ControlFlowFragment",
    "DiagramNode",
    "FragmentKind",
    "FragmentNode",
    "Interaction",
    "MethodDeclaration",
    "SequenceOutputConfig",
    "TraceResult",
    "TypeAstData",
    "TypeKind",
    "iter_interactions",
    "start_line_of",
]
