"""In-memory tracker for questions marked as asked during a session."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from .models import AskedItem, Status

DUPLICATE_MESSAGE = "This question has already been marked as asked."

logger = logging.getLogger(__name__)


class DuplicateQuestionError(ValueError):
    """Raised when a question is already tracked."""

    def __init__(self, text: str) -> None:
        super().__init__(DUPLICATE_MESSAGE)
        self.text = text


@dataclass(frozen=True)
class EditHandle:
    """Pre-filled edit buffer for one tracked item."""

    index: int
    text: str
    cursor: int


class TrackerStore:
    """Ordered list of asked items with grading and in-place editing.

    Items are never removed or re-sorted. Only one item is in edit mode at a
    time; starting a new edit commits the active one with its untouched buffer.
    """

    def __init__(self) -> None:
        self._items: list[AskedItem] = []
        self._active_edit: EditHandle | None = None
        self._reveal_index: int | None = None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[AskedItem]:
        return iter(self._items)

    @property
    def items(self) -> tuple[AskedItem, ...]:
        """Snapshot of tracked items in insertion order."""
        return tuple(self._items)

    @property
    def editing_index(self) -> int | None:
        """Index of the item in edit mode, if any."""
        if self._active_edit is None:
            return None
        return self._active_edit.index

    @property
    def reveal_index(self) -> int | None:
        """Index of the most recently added item, which the view should reveal."""
        return self._reveal_index

    def is_editing(self, index: int) -> bool:
        """Return whether the item at index is in edit mode."""
        return self.editing_index == index

    def get(self, index: int) -> AskedItem:
        """Return one item by index."""
        self._check_index(index)
        return self._items[index]

    def add_asked_question(self, text: str) -> int:
        """Append a question and return its index."""
        if not text:
            raise ValueError("Asked question text must not be empty.")
        if any(item.original_text == text for item in self._items):
            logger.info("Rejected duplicate asked question: %r", text)
            raise DuplicateQuestionError(text)
        self._items.append(AskedItem(text=text))
        self._reveal_index = len(self._items) - 1
        logger.debug("Marked question %d as asked", self._reveal_index)
        return self._reveal_index

    def set_status(self, index: int, status: Status) -> None:
        """Grade one item, replacing any earlier grade."""
        self._check_index(index)
        if status is Status.UNSET:
            raise ValueError("Choose one of: " + ", ".join(item.label for item in Status.gradable()))
        self._items[index].status = status
        logger.debug("Set status of item %d to %s", index, status.name)

    def begin_edit(self, index: int) -> EditHandle:
        """Put one item in edit mode and return its pre-filled buffer."""
        self._check_index(index)
        active = self._active_edit
        if active is not None and active.index != index:
            self.commit_edit(active.index, active.text)
        text = self._items[index].text
        handle = EditHandle(index=index, text=text, cursor=_initial_cursor(text))
        self._active_edit = handle
        return handle

    def commit_edit(self, index: int, new_text: str) -> None:
        """Replace item text verbatim and leave edit mode."""
        self._check_index(index)
        self._items[index].text = new_text
        if self.editing_index == index:
            self._active_edit = None
        logger.debug("Committed edit of item %d", index)

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self._items)):
            raise IndexError(f"Asked question index {index} out of range for {len(self._items)} items.")


def _initial_cursor(text: str) -> int:
    """Caret offset: start of the second line for multi-line text, else the end."""
    newline = text.find("\n")
    if newline == -1:
        return len(text)
    return newline + 1
