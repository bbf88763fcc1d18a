"""Mermaid sequence diagram renderer.

Walks a TraceResult and emits Mermaid ``sequenceDiagram`` text. The
filter of the render-time config is applied again, so one trace can be
rendered with different filters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seqtrace.application.renderers.mermaid_output import MermaidOutput, call_label
from seqtrace.domain.exceptions.snapshot import SnapshotError
from seqtrace.domain.model.diagram_node import (
    ControlFlowFragment,
    DiagramNode,
    Interaction,
    start_line_of,
)
from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.method_id import method_name_of, participant_id_of, strip_generics

if TYPE_CHECKING:
    from seqtrace.domain.model.annotation import AnnotationInfo
    from seqtrace.domain.model.configuration import SequenceOutputConfig
    from seqtrace.domain.model.trace_result import TraceResult
    from seqtrace.domain.model.type_ast_data import TypeAstData
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)

ENTRY_ACTOR = "User"

_FRAME_KEYWORDS = {
    FragmentKind.ALTERNATIVE: "alt",
    FragmentKind.LOOP: "loop",
    FragmentKind.OPTIONAL: "opt",
}


class MermaidRenderer:
    """Renders trace results as Mermaid sequence diagrams.

    A callee is activated only when something is drawn inside its
    activation: internal calls (unless chain details are hidden) or the
    next link of a fluent chain.

    With an index, annotations of the entry type and of each called
    method are drawn as notes.
    """

    def __init__(self, index: TypeIndexPort | None = None) -> None:
        """Initialize renderer.

        Args:
            index: Type index for annotation notes and index-aware
                filters. None = no notes, filters get no index.
        """
        self._index = index

    @property
    def format_name(self) -> str:
        """Output format name."""
        return "Mermaid"

    def render(self, result: TraceResult, config: SequenceOutputConfig) -> str:
        """Render trace result as Mermaid text.

        Args:
            result: Trace to render
            config: Render-time filter and detail flags

        Returns:
            Mermaid sequenceDiagram text
        """
        return _MermaidWalk(self._index, config).run(result)


class _MermaidWalk:
    """State of one render call."""

    def __init__(self, index: TypeIndexPort | None, config: SequenceOutputConfig) -> None:
        self._index = index
        self._config = config
        self._output = MermaidOutput()

    def run(self, result: TraceResult) -> str:
        entry_type = result.entry_type or result.entry_method_id
        entry_id = participant_id_of(entry_type)
        method_name = method_name_of(result.entry_method_id) or result.entry_method_id

        self._output.add_actor(ENTRY_ACTOR)
        self._output.add_participant(entry_id, entry_type)

        entry_data = self._type_data(entry_type)
        if entry_data is not None:
            self._add_note(entry_id, entry_data.annotations)

        self._output.add_call(ENTRY_ACTOR, entry_id, f"{method_name}()")
        self._output.activate(entry_id)
        for node in result.nodes:
            self._node(node, entry_id)
        self._output.deactivate(entry_id)

        return self._output.render()

    def _node(self, node: DiagramNode, caller_id: str) -> None:
        match node:
            case Interaction():
                self._interaction(node, caller_id, is_condition=False)
            case ControlFlowFragment():
                self._fragment(node, caller_id)

    def _excluded(self, interaction: Interaction) -> bool:
        return self._config.filter.should_exclude_call(interaction.callee, interaction.method_name, self._index)

    def _drawn(self, node: DiagramNode) -> bool:
        match node:
            case Interaction():
                return not self._excluded(node)
            case ControlFlowFragment():
                return True

    def _interaction(self, interaction: Interaction, caller_id: str, *, is_condition: bool) -> None:
        if self._excluded(interaction):
            return

        callee = interaction.callee
        callee_id = participant_id_of(callee)
        self._output.add_participant(callee_id, callee)
        self._add_method_note(interaction, callee_id)
        self._output.add_call(
            caller_id,
            callee_id,
            call_label(
                interaction.method_name,
                interaction.arguments,
                interaction.assigned_to,
                interaction.return_type,
                is_condition=is_condition,
            ),
        )

        show_internal = not self._config.hide_details_in_chain_expression and any(
            self._drawn(node) for node in interaction.internal_calls
        )
        next_call = interaction.next_chained_call
        if next_call is not None and self._excluded(next_call):
            next_call = None
        if not show_internal and next_call is None:
            return

        self._output.activate(callee_id)
        if show_internal:
            for node in interaction.internal_calls:
                self._node(node, callee_id)
        if next_call is not None:
            self._interaction(next_call, callee_id, is_condition=is_condition)
        self._output.deactivate(callee_id)

    def _fragment(self, fragment: ControlFlowFragment, caller_id: str, *, continues_frame: bool = False) -> None:
        # A continuation outside of any frame is drawn as a frame of its own
        opens = fragment.opens_frame or not continues_frame
        if opens:
            self._output.open_frame(_FRAME_KEYWORDS[fragment.kind], fragment.condition)
        else:
            self._output.add_else(fragment.condition)

        show_details = not self._config.hide_details_in_conditionals
        if show_details:
            for interaction in fragment.condition_interactions:
                self._interaction(interaction, caller_id, is_condition=True)

        # Body calls and nested frames in source order, else branches last
        body: list[DiagramNode] = [f for f in fragment.alternatives if f.opens_frame]
        if show_details:
            body.extend(fragment.content_interactions)
        for node in sorted(body, key=start_line_of):
            self._node(node, caller_id)
        for continuation in fragment.alternatives:
            if not continuation.opens_frame:
                self._fragment(continuation, caller_id, continues_frame=True)

        if opens:
            self._output.end_frame()

    # -------------------------------------------------------------------------
    # Annotation notes
    # -------------------------------------------------------------------------

    def _type_data(self, type_fqn: str) -> TypeAstData | None:
        if self._index is None or not type_fqn:
            return None
        try:
            return self._index.get(strip_generics(type_fqn))
        except SnapshotError as e:
            logger.warning("no annotations for %s: %s", type_fqn, e)
            return None

    def _add_method_note(self, interaction: Interaction, participant_id: str) -> None:
        data = self._type_data(interaction.callee)
        if data is None:
            return
        method = data.find_method(interaction.method_id)
        if method is not None:
            self._add_note(participant_id, method.annotations)

    def _add_note(self, participant_id: str, annotations: tuple[AnnotationInfo, ...]) -> None:
        if annotations:
            self._output.add_note(participant_id, ", ".join(str(a) for a in annotations))
