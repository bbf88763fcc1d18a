"""Trace result value object."""

from __future__ import annotations

from dataclasses import dataclass

from seqtrace.domain.model.diagram_node import (
    ControlFlowFragment,
    DiagramNode,
    Interaction,
    iter_interactions,
)
from seqtrace.domain.model.method_id import strip_generics, type_fqn_of


@dataclass(frozen=True, slots=True)
class TraceResult:
    """Result of one trace invocation: the call tree of an entry point.

    Immutable snapshot. Consumed independently by renderers and by
    non-rendering collaborators such as the source extractor.

    Attributes:
        entry_method_id: MethodId the trace started from
        nodes: Top-level nodes of the entry method body, in source order
    """

    entry_method_id: str
    nodes: tuple[DiagramNode, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.entry_method_id:
            raise ValueError("entry_method_id must not be empty")

    @property
    def entry_type(self) -> str:
        """Type FQN owning the entry method."""
        return type_fqn_of(self.entry_method_id)

    @property
    def is_empty(self) -> bool:
        """Nothing observable happens in the entry method."""
        return not self.nodes

    @property
    def node_count(self) -> int:
        """Number of nodes anywhere in the tree.

        Counts internal calls, chain links, fragments and the
        interactions inside fragments.
        """
        return _count(self.nodes)

    @property
    def interaction_count(self) -> int:
        """Number of interactions anywhere in the tree."""
        return sum(1 for _ in iter_interactions(self.nodes))

    def involved_types(self) -> frozenset[str]:
        """Entry type plus every callee type in the tree (generics stripped)."""
        types = {strip_generics(self.entry_type)}
        types.update(strip_generics(i.callee) for i in iter_interactions(self.nodes) if i.callee)
        return frozenset(types)

    def involved_method_ids(self) -> frozenset[str]:
        """Entry method id plus name-only ids of every invoked method."""
        ids = {self.entry_method_id}
        ids.update(i.method_id for i in iter_interactions(self.nodes) if i.callee)
        return frozenset(ids)

    @classmethod
    def empty(cls, entry_method_id: str) -> TraceResult:
        """Create result with no nodes."""
        return cls(entry_method_id=entry_method_id, nodes=())


def _count(nodes: tuple[DiagramNode, ...]) -> int:
    total = 0
    for node in nodes:
        match node:
            case Interaction():
                for link in node.chain():
                    total += 1 + _count(link.internal_calls)
            case ControlFlowFragment():
                total += 1
                total += _count(node.condition_interactions)
                total += _count(node.content_interactions)
                total += _count(node.alternatives)
    return total
