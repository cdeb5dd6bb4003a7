"""View-models and text rendering for the terminal display."""

from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser

from .models import QuestionSelection
from .tracker import TrackerStore

EMPTY_TRACKER_TEXT = "No questions marked as asked yet."
EMPTY_TEXT_PLACEHOLDER = "(empty)"
UNGRADED_LABEL = "not graded"

_BLOCK_TAGS = {
    "p",
    "div",
    "ul",
    "ol",
    "pre",
    "blockquote",
    "table",
    "tr",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
}


@dataclass(frozen=True)
class AskedItemView:
    """Display state of one tracked question."""

    number: int
    text: str
    status_label: str
    editing: bool
    revealed: bool


@dataclass(frozen=True)
class TrackerView:
    """Display state of the whole tracker."""

    items: tuple[AskedItemView, ...]
    reveal_number: int | None


def build_tracker_view(tracker: TrackerStore) -> TrackerView:
    """Rebuild the complete view-model from tracker state."""
    reveal = tracker.reveal_index
    items = tuple(
        AskedItemView(
            number=index + 1,
            text=item.text,
            status_label=item.status.label,
            editing=tracker.is_editing(index),
            revealed=index == reveal,
        )
        for index, item in enumerate(tracker)
    )
    return TrackerView(items=items, reveal_number=None if reveal is None else reveal + 1)


def render_tracker(view: TrackerView) -> list[str]:
    """Render tracker view as printable lines."""
    lines = ["=== Asked Questions ==="]
    if not view.items:
        lines.append(EMPTY_TRACKER_TEXT)
        return lines
    for item in view.items:
        marker = ">" if item.revealed else " "
        prefix = f"{marker} {item.number}. "
        indent = " " * len(prefix)
        text_lines = item.text.split("\n") if item.text else [EMPTY_TEXT_PLACEHOLDER]
        first = prefix + text_lines[0]
        if item.editing:
            first += " [editing]"
        lines.append(first)
        lines.extend(indent + line for line in text_lines[1:])
        lines.append(f"{indent}Status: {item.status_label or UNGRADED_LABEL}")
    return lines


def render_question(selection: QuestionSelection) -> list[str]:
    """Render one selected question with its converted answer."""
    lines = [f"Question {selection.index + 1}: {selection.question}", ""]
    answer = html_to_text(selection.answer)
    lines.extend(answer.split("\n") if answer else ["(no answer recorded)"])
    return lines


class _TextExtractor(HTMLParser):
    """Collect readable text from an HTML answer fragment."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []
        self._pre_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "br":
            self.parts.append("\n")
        elif tag == "li":
            self.parts.append("\n- ")
        elif tag in _BLOCK_TAGS:
            self.parts.append("\n")
        if tag == "pre":
            self._pre_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in _BLOCK_TAGS:
            self.parts.append("\n")
        if tag == "pre":
            self._pre_depth = max(0, self._pre_depth - 1)

    def handle_data(self, data: str) -> None:
        if self._pre_depth:
            self.parts.append(data)
            return
        collapsed = re.sub(r"\s+", " ", data)
        if self._at_line_start():
            collapsed = collapsed.lstrip()
        if collapsed:
            self.parts.append(collapsed)

    def _at_line_start(self) -> bool:
        if not self.parts:
            return True
        last = self.parts[-1]
        return last.endswith("\n") or last == "\n- "


def html_to_text(fragment: str) -> str:
    """Convert an HTML answer fragment into plain terminal text."""
    parser = _TextExtractor()
    parser.feed(fragment)
    parser.close()

    lines: list[str] = []
    for line in "".join(parser.parts).split("\n"):
        line = line.rstrip()
        if not line and (not lines or not lines[-1]):
            continue
        lines.append(line)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
