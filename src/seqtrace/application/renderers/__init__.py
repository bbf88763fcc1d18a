"""Renderers: TraceResult → text.

All renderers implement the DiagramRenderer port and return str.
"""

from seqtrace.application.renderers.mermaid import MermaidRenderer
from seqtrace.application.renderers.mermaid_output import MermaidOutput, call_label, simplify_argument
from seqtrace.application.renderers.tree import TreeRenderer

__all__ = [
    "MermaidOutput",
    "MermaidRenderer",
    "TreeRenderer",
    "call_label",
    "simplify_argument",
]
