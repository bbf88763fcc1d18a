"""Sequence tracer: depth-bounded walk of the static call graph.

Produces a TraceResult from an entry MethodId using the type index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from seqtrace.domain.exceptions.snapshot import SnapshotError
from seqtrace.domain.model.call_site import CallSiteNode, chain_heads
from seqtrace.domain.model.diagram_node import ControlFlowFragment, DiagramNode, Interaction
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_id import in_scope, strip_generics, type_fqn_of
from seqtrace.domain.model.trace_result import TraceResult

if TYPE_CHECKING:
    from seqtrace.domain.model.configuration import SequenceOutputConfig
    from seqtrace.domain.model.type_ast_data import TypeAstData
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)

_SourceNode: TypeAlias = CallSiteNode | FragmentNode


@dataclass(slots=True)
class _TraceContext:
    """Mutable state of one trace call. Never shared between calls.

    Attributes:
        config: Configuration of this trace
        visited: Methods on the current path (entry to current method)
    """

    config: SequenceOutputConfig
    visited: set[str] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class _Owner:
    """Method a node is built for."""

    type_fqn: str
    method_name: str


def _source_line(node: _SourceNode) -> int:
    match node:
        case CallSiteNode():
            return node.line
        case FragmentNode():
            return node.start_line


class SequenceTracer:
    """Builds call trees from entry points.

    Stateless between calls: every trace() gets its own context, so one
    tracer may serve concurrent traces against a built index.

    Rules:
    - depth is consumed only when entering a callee's body
    - chain links and fragment contents stay at the current depth
    - a method already on the current path is not re-entered
      (siblings may call the same method again)
    - missing types and methods end the branch with a warning
    """

    def __init__(self, index: TypeIndexPort) -> None:
        """Initialize tracer.

        Args:
            index: Type index to resolve declarations from

        Raises:
            TypeError: If index is None
        """
        if index is None:
            raise TypeError("index must not be None")
        self._index = index

    @property
    def index(self) -> TypeIndexPort:
        """Type index this tracer reads from."""
        return self._index

    def trace(self, entry_method_id: str, config: SequenceOutputConfig) -> TraceResult:
        """Trace what happens when entry method is called.

        Args:
            entry_method_id: MethodId to start from
            config: Depth, scope and filter of this trace

        Returns:
            TraceResult with the entry method's body as top-level nodes.
            Empty when depth <= 0, the entry is out of scope or excluded.

        Raises:
            ValueError: If entry_method_id is empty
            TypeError: If config is None
        """
        if not entry_method_id:
            raise ValueError("entry_method_id must not be empty")
        if config is None:
            raise TypeError("config must not be None")

        if config.traces_nothing:
            logger.debug("depth %d and scope %s trace nothing", config.depth, sorted(config.base_packages))
            return TraceResult.empty(entry_method_id)

        ctx = _TraceContext(config=config)
        nodes = self._trace_method(entry_method_id, ctx, config.depth)
        result = TraceResult(entry_method_id=entry_method_id, nodes=nodes)

        logger.info(
            "traced %s (depth %d): %d top-level, %d total nodes, %d interactions",
            entry_method_id,
            config.depth,
            len(result.nodes),
            result.node_count,
            result.interaction_count,
        )
        return result

    # -------------------------------------------------------------------------
    # Method bodies
    # -------------------------------------------------------------------------

    def _trace_method(
        self,
        method_id: str,
        ctx: _TraceContext,
        depth: int,
    ) -> tuple[DiagramNode, ...]:
        if depth <= 0 or method_id in ctx.visited:
            return ()
        if not in_scope(method_id, ctx.config.base_packages):
            logger.debug("not in scope: %s", method_id)
            return ()
        if ctx.config.filter.should_exclude(method_id, self._index):
            return ()

        type_fqn = strip_generics(type_fqn_of(method_id))
        if not type_fqn or type_fqn == method_id:
            logger.warning("malformed method id: %s", method_id)
            return ()

        data = self._lookup(type_fqn)
        if data is None:
            logger.warning("type not found in index: %s", type_fqn)
            return ()

        method = data.find_method(method_id)
        if method is None:
            logger.warning("method not found: %s", method_id)
            return ()

        # Resolved and name-only ids of one declaration share a path key
        path_key = method.method_id(type_fqn)
        if path_key in ctx.visited:
            return ()

        calls = [c for c in data.find_call_sites(method) if self._follows(c, ctx)]
        fragments = list(data.find_fragments(method))
        if not calls and not fragments:
            return ()

        owner = _Owner(type_fqn=type_fqn, method_name=method.name)
        merged: list[_SourceNode] = sorted([*calls, *fragments], key=_source_line)

        ctx.visited.add(path_key)
        try:
            return tuple(self._build(node, owner, ctx, depth) for node in merged)
        finally:
            ctx.visited.discard(path_key)

    def _lookup(self, type_fqn: str) -> TypeAstData | None:
        try:
            return self._index.get(type_fqn)
        except SnapshotError as e:
            logger.warning("type %s unavailable: %s", type_fqn, e)
            return None

    def _follows(self, call: CallSiteNode, ctx: _TraceContext) -> bool:
        """Check if call site becomes a node of the trace."""
        if not call.is_resolved:
            if not call.method_name:
                logger.debug("dropped call without method name at line %d", call.line)
                return False
            logger.warning(
                "unresolved callee of %s() at %s:%d",
                call.method_name,
                call.caller,
                call.line,
            )
            return False
        return not ctx.config.filter.should_exclude_call(call.callee, call.method_name, self._index)

    # -------------------------------------------------------------------------
    # Node construction (bottom-up)
    # -------------------------------------------------------------------------

    def _build(self, node: _SourceNode, owner: _Owner, ctx: _TraceContext, depth: int) -> DiagramNode:
        match node:
            case CallSiteNode():
                return self._interaction(node, ctx, depth)
            case FragmentNode():
                return self._fragment(node, owner, ctx, depth)

    def _interaction(self, call: CallSiteNode, ctx: _TraceContext, depth: int) -> Interaction:
        internal_calls = self._trace_method(call.target_method_id, ctx, depth - 1)

        next_call = call.next_chained_call
        next_interaction = None
        if next_call is not None and self._follows(next_call, ctx):
            next_interaction = self._interaction(next_call, ctx, depth)

        return Interaction(
            caller=call.caller,
            callee=call.callee,
            method_name=call.method_name,
            line=call.line,
            arguments=call.arguments,
            return_type=call.return_type,
            assigned_to=call.assigned_to,
            callee_variable=call.callee_variable,
            callee_instance_id=call.callee_instance_id,
            next_chained_call=next_interaction,
            internal_calls=internal_calls,
        )

    def _interactions(
        self,
        calls: tuple[CallSiteNode, ...],
        ctx: _TraceContext,
        depth: int,
    ) -> tuple[Interaction, ...]:
        ordered = sorted(
            (c for c in chain_heads(calls) if self._follows(c, ctx)),
            key=lambda c: c.line,
        )
        return tuple(self._interaction(c, ctx, depth) for c in ordered)

    def _fragment(
        self,
        fragment: FragmentNode,
        owner: _Owner,
        ctx: _TraceContext,
        depth: int,
    ) -> ControlFlowFragment:
        alternatives = sorted(fragment.alternatives, key=lambda f: f.start_line)
        return ControlFlowFragment(
            kind=fragment.kind,
            condition=fragment.condition,
            start_line=fragment.start_line,
            end_line=fragment.end_line,
            caller_type=owner.type_fqn,
            caller_method=owner.method_name,
            condition_interactions=self._interactions(fragment.condition_calls, ctx, depth),
            content_interactions=self._interactions(fragment.content_calls, ctx, depth),
            alternatives=tuple(self._fragment(f, owner, ctx, depth) for f in alternatives),
            is_first_alternative=fragment.first_alternative,
        )
