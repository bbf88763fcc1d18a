"""Mermaid sequence diagram text assembly.

MermaidOutput collects diagram items in emission order and lays them out:
participants and actors hoisted to the top (first declaration wins),
body indented two spaces per open activation or frame.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import TypeAlias

from seqtrace.domain.model.method_id import simple_name_of

_INDENT = "  "
_PACKAGE_QUALIFIER = re.compile(r"[^\].]*\.")
_NO_RETURN_TYPES = frozenset({"void", "Void"})


@dataclass(frozen=True, slots=True)
class Actor:
    """Human actor (``actor User``)."""

    name: str


@dataclass(frozen=True, slots=True)
class Participant:
    """Declared lifeline. id is diagram-safe, display is the FQN."""

    participant_id: str
    display_name: str


@dataclass(frozen=True, slots=True)
class Call:
    """Synchronous message arrow."""

    caller_id: str
    callee_id: str
    label: str


@dataclass(frozen=True, slots=True)
class Activation:
    """activate (active=True) or deactivate (active=False)."""

    participant_id: str
    active: bool


@dataclass(frozen=True, slots=True)
class FrameStart:
    """Opening line of alt/loop/opt."""

    keyword: str
    condition: str


@dataclass(frozen=True, slots=True)
class FrameElse:
    """else / else-if branch of the open alt frame."""

    condition: str


@dataclass(frozen=True, slots=True)
class FrameEnd:
    """Closes the innermost frame."""


@dataclass(frozen=True, slots=True)
class Note:
    """``Note over participant: text``."""

    participant_id: str
    text: str


MermaidItem: TypeAlias = Actor | Participant | Call | Activation | FrameStart | FrameElse | FrameEnd | Note


def simplify_argument(argument: str) -> str:
    """Shorten argument expression for display.

    ``com.x.Order.getTotal()`` -> ``total``, ``this.name`` -> ``name``.
    """
    text = _PACKAGE_QUALIFIER.sub("", argument)
    text = text.removesuffix("()")
    if text.startswith("get") and text[3:4].isupper():
        text = text[3].lower() + text[4:]
    return text


def call_label(
    method_name: str,
    arguments: tuple[str, ...] = (),
    assigned_to: str | None = None,
    return_type: str | None = None,
    *,
    is_condition: bool = False,
) -> str:
    """Build message label: ``[cond] x = method(args): Return``."""
    args = ", ".join(simplify_argument(a) for a in arguments)
    label = f"{method_name}({args})"
    if assigned_to:
        label = f"{assigned_to} = {label}"
    if return_type and return_type not in _NO_RETURN_TYPES:
        label = f"{label}: {simple_name_of(return_type)}"
    if is_condition:
        label = f"[cond] {label}"
    return label


class MermaidOutput:
    """Ordered Mermaid item buffer.

    Tracks activation depth per participant and open frames, so
    mismatched deactivate/end calls fail at the point of the mistake.
    """

    def __init__(self) -> None:
        self._items: list[MermaidItem] = []
        self._active: Counter[str] = Counter()
        self._open_frames = 0

    @property
    def items(self) -> tuple[MermaidItem, ...]:
        """Items in emission order."""
        return tuple(self._items)

    def add_actor(self, name: str) -> None:
        self._items.append(Actor(name))

    def add_participant(self, participant_id: str, display_name: str) -> None:
        self._items.append(Participant(participant_id, display_name))

    def add_call(self, caller_id: str, callee_id: str, label: str) -> None:
        self._items.append(Call(caller_id, callee_id, _one_line(label)))

    def add_note(self, participant_id: str, text: str) -> None:
        self._items.append(Note(participant_id, _one_line(text)))

    def activate(self, participant_id: str) -> None:
        self._active[participant_id] += 1
        self._items.append(Activation(participant_id, active=True))

    def deactivate(self, participant_id: str) -> None:
        """Close one activation.

        Raises:
            ValueError: If participant has no open activation
        """
        if self._active[participant_id] <= 0:
            raise ValueError(f"{participant_id} is not active")
        self._active[participant_id] -= 1
        self._items.append(Activation(participant_id, active=False))

    def open_frame(self, keyword: str, condition: str) -> None:
        """Open alt/loop/opt frame."""
        if keyword not in {"alt", "loop", "opt"}:
            raise ValueError(f"unknown frame keyword: {keyword}")
        self._open_frames += 1
        self._items.append(FrameStart(keyword, _one_line(condition)))

    def add_else(self, condition: str) -> None:
        """Add else branch to the innermost frame.

        Raises:
            ValueError: If no frame is open
        """
        if self._open_frames <= 0:
            raise ValueError("else outside of a frame")
        self._items.append(FrameElse(_one_line(condition)))

    def end_frame(self) -> None:
        """Close innermost frame.

        Raises:
            ValueError: If no frame is open
        """
        if self._open_frames <= 0:
            raise ValueError("end without an open frame")
        self._open_frames -= 1
        self._items.append(FrameEnd())

    def render(self) -> str:
        """Lay out collected items as Mermaid text."""
        header: list[str] = []
        declared: set[str] = set()
        body: list[str] = []
        level = 0

        for item in self._items:
            match item:
                case Actor(name=name):
                    if name not in declared:
                        declared.add(name)
                        header.append(f"actor {name}")
                case Participant(participant_id=pid, display_name=display):
                    if pid not in declared:
                        declared.add(pid)
                        header.append(f"participant {pid} as {display}")
                case Call(caller_id=caller, callee_id=callee, label=label):
                    body.append(f"{_INDENT * level}{caller}->>{callee}: {label}")
                case Note(participant_id=pid, text=text):
                    body.append(f"{_INDENT * level}Note over {pid}: {text}")
                case Activation(participant_id=pid, active=True):
                    body.append(f"{_INDENT * level}activate {pid}")
                    level += 1
                case Activation(participant_id=pid, active=False):
                    level -= 1
                    body.append(f"{_INDENT * level}deactivate {pid}")
                case FrameStart(keyword=keyword, condition=condition):
                    body.append(f"{_INDENT * level}{_frame_line(keyword, condition)}")
                    level += 1
                case FrameElse(condition=condition):
                    body.append(f"{_INDENT * (level - 1)}{_frame_line('else', condition)}")
                case FrameEnd():
                    level -= 1
                    body.append(f"{_INDENT * level}end")

        return "\n".join(["sequenceDiagram", *header, *body]) + "\n"

    def __str__(self) -> str:
        return self.render()


def _frame_line(keyword: str, condition: str) -> str:
    return f"{keyword} {condition}" if condition else keyword


def _one_line(text: str) -> str:
    """Collapse line breaks and runs of whitespace: each item is one statement."""
    return " ".join(text.split())
