"""Tree renderer: TraceResult → indented rich tree string."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from seqtrace.application.renderers.mermaid_output import call_label
from seqtrace.domain.model.diagram_node import ControlFlowFragment, DiagramNode, Interaction
from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.method_id import simple_name_of

if TYPE_CHECKING:
    from seqtrace.domain.model.configuration import SequenceOutputConfig
    from seqtrace.domain.model.trace_result import TraceResult
    from seqtrace.domain.ports.type_index import TypeIndexPort

_FRAME_LABELS = {
    FragmentKind.ALTERNATIVE: "alt",
    FragmentKind.LOOP: "loop",
    FragmentKind.OPTIONAL: "opt",
}


class TreeRenderer:
    """Renders trace results as a plain indented tree for terminals.

    Output is str, not print(). Caller decides destination.
    Applies the same render-time filter and detail flags as the
    diagram renderer.
    """

    def __init__(self, index: TypeIndexPort | None = None, width: int = 120) -> None:
        """Initialize renderer.

        Args:
            index: Type index passed to index-aware filters
            width: Console width in characters
        """
        self._index = index
        self._width = width

    @property
    def format_name(self) -> str:
        """Output format name."""
        return "Tree"

    def render(self, result: TraceResult, config: SequenceOutputConfig) -> str:
        """Render trace result as tree text (no color codes)."""
        root = Tree(Text(result.entry_method_id, style="bold"))
        for node in result.nodes:
            self._add_node(root, node, config)

        output = StringIO()
        console = Console(file=output, width=self._width, no_color=True, highlight=False)
        console.print(root)
        return output.getvalue()

    def _add_node(self, parent: Tree, node: DiagramNode, config: SequenceOutputConfig) -> None:
        match node:
            case Interaction():
                self._add_interaction(parent, node, config, prefix="")
            case ControlFlowFragment():
                self._add_fragment(parent, node, config)

    def _add_interaction(
        self,
        parent: Tree,
        interaction: Interaction,
        config: SequenceOutputConfig,
        prefix: str,
    ) -> None:
        if config.filter.should_exclude_call(interaction.callee, interaction.method_name, self._index):
            return

        label = call_label(
            interaction.method_name,
            interaction.arguments,
            interaction.assigned_to,
            interaction.return_type,
        )
        branch = parent.add(
            Text(f"{prefix}{simple_name_of(interaction.callee)}.{label}  (line {interaction.line})")
        )

        if not config.hide_details_in_chain_expression:
            for child in interaction.internal_calls:
                self._add_node(branch, child, config)
        if interaction.next_chained_call is not None:
            self._add_interaction(branch, interaction.next_chained_call, config, prefix="then ")

    def _add_fragment(self, parent: Tree, fragment: ControlFlowFragment, config: SequenceOutputConfig) -> None:
        keyword = _FRAME_LABELS[fragment.kind] if fragment.opens_frame else "else"
        label = f"{keyword} {fragment.condition}" if fragment.condition else keyword
        branch = parent.add(Text(label, style="italic"))

        if not config.hide_details_in_conditionals:
            for interaction in fragment.condition_interactions:
                self._add_interaction(branch, interaction, config, prefix="[cond] ")
            for interaction in fragment.content_interactions:
                self._add_interaction(branch, interaction, config, prefix="")
        for alternative in fragment.alternatives:
            self._add_fragment(parent if not alternative.opens_frame else branch, alternative, config)
