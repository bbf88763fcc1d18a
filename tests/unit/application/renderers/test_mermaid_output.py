"""Tests for application/renderers/mermaid_output.py."""

import pytest

from seqtrace.application.renderers.mermaid_output import (
    Activation,
    Call,
    MermaidOutput,
    call_label,
    simplify_argument,
)


class TestSimplifyArgument:
    """Argument display text."""

    @pytest.mark.parametrize(
        ("argument", "expected"),
        [
            ("com.x.Order.getTotal()", "total"),
            ("this.name", "name"),
            ("order", "order"),
            ("getter", "getter"),
            ("list.get(0)", "get(0)"),
            ("request.getId()", "id"),
            ("build()", "build"),
        ],
    )
    def test_simplify(self, argument: str, expected: str) -> None:
        """Qualifiers, empty parens and getter prefixes removed."""
        assert simplify_argument(argument) == expected


class TestCallLabel:
    """Message labels."""

    def test_plain(self) -> None:
        """Name and empty parentheses."""
        assert call_label("run") == "run()"

    def test_full(self) -> None:
        """Assignment, simplified arguments, simple return type."""
        label = call_label("find", ("this.id", "limit"), "user", "pkg.model.User")

        assert label == "user = find(id, limit): User"

    def test_void_omitted(self) -> None:
        """void and Void are not shown."""
        assert call_label("save", return_type="void") == "save()"
        assert call_label("save", return_type="Void") == "save()"

    def test_generic_return_type(self) -> None:
        """Generic return type shown by simple name."""
        assert call_label("all", return_type="java.util.List<pkg.User>") == "all(): List"

    def test_condition_prefix(self) -> None:
        """Condition calls are marked."""
        assert call_label("isValid", return_type="boolean", is_condition=True) == "[cond] isValid(): boolean"


class TestMermaidOutputLayout:
    """Header hoisting and indentation."""

    def test_header_hoisted_and_deduplicated(self) -> None:
        """Declarations go to the top, first declaration wins."""
        out = MermaidOutput()
        out.add_actor("User")
        out.add_participant("A", "pkg.A")
        out.add_call("User", "A", "run()")
        out.add_participant("B", "pkg.B")
        out.add_participant("A", "other.A")
        out.add_call("A", "B", "go()")

        assert out.render() == (
            "sequenceDiagram\n"
            "actor User\n"
            "participant A as pkg.A\n"
            "participant B as pkg.B\n"
            "User->>A: run()\n"
            "A->>B: go()\n"
        )

    def test_indentation(self) -> None:
        """Two spaces per open activation or frame, else one level up."""
        out = MermaidOutput()
        out.activate("A")
        out.open_frame("alt", "ok")
        out.add_call("A", "B", "x()")
        out.add_else("")
        out.add_note("B", "@Service")
        out.end_frame()
        out.deactivate("A")

        assert out.render().splitlines()[1:] == [
            "activate A",
            "  alt ok",
            "    A->>B: x()",
            "  else",
            "    Note over B: @Service",
            "  end",
            "deactivate A",
        ]

    def test_note_whitespace_collapsed(self) -> None:
        """Line breaks in note text become single spaces."""
        out = MermaidOutput()
        out.add_note("A", "@Query(\n  value=x\n)")

        assert "Note over A: @Query( value=x )" in out.render()

    def test_items_in_order(self) -> None:
        """Items kept in emission order."""
        out = MermaidOutput()
        out.add_call("A", "B", "x()")
        out.activate("B")

        assert out.items[:2] == (Call("A", "B", "x()"), Activation("B", active=True))

    def test_multiline_text_kept_on_one_line(self) -> None:
        """Line breaks in conditions and labels do not start new statements."""
        out = MermaidOutput()
        out.open_frame("alt", "a > 0 &&\n    b < 1")
        out.add_call("A", "B", "run(x -> {\n  y();\n})")
        out.add_else("c\n  || d")
        out.end_frame()

        assert out.render().splitlines()[1:] == [
            "alt a > 0 && b < 1",
            "  A->>B: run(x -> { y(); })",
            "else c || d",
            "end",
        ]

    def test_str(self) -> None:
        """str() renders."""
        out = MermaidOutput()
        assert str(out) == "sequenceDiagram\n"


class TestMermaidOutputErrors:
    """Misuse fails at the faulty call."""

    def test_deactivate_inactive(self) -> None:
        """Deactivate without activate."""
        with pytest.raises(ValueError, match="not active"):
            MermaidOutput().deactivate("A")

    def test_else_outside_frame(self) -> None:
        """else needs an open frame."""
        with pytest.raises(ValueError, match="else outside"):
            MermaidOutput().add_else("x")

    def test_end_without_frame(self) -> None:
        """end needs an open frame."""
        with pytest.raises(ValueError, match="end without"):
            MermaidOutput().end_frame()

    def test_unknown_keyword(self) -> None:
        """Only alt, loop and opt frames."""
        with pytest.raises(ValueError, match="unknown frame keyword"):
            MermaidOutput().open_frame("par", "")
