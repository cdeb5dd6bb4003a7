"""Core domain models for the question catalogue and asked-question tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Status(Enum):
    """Self-graded outcome for one asked question."""

    UNSET = ""
    ANSWERED = "Answered"
    NOT_ANSWERED = "Not Answered"
    CONFUSING = "Confusing"
    PARTIALLY_CORRECT = "Partially correct"

    @property
    def label(self) -> str:
        """Display label, empty for unset."""
        return self.value

    @classmethod
    def gradable(cls) -> tuple[Status, ...]:
        """Statuses a user can pick, in menu order."""
        return (cls.ANSWERED, cls.NOT_ANSWERED, cls.CONFUSING, cls.PARTIALLY_CORRECT)


@dataclass(frozen=True)
class Question:
    """One catalogue question with its HTML answer."""

    id: str
    category_id: str
    question: str
    answer: str


@dataclass(frozen=True)
class Category:
    """Topic category holding ordered questions."""

    id: str
    title: str
    order: int
    description: str
    questions: list[Question]


@dataclass(frozen=True)
class QuestionSelection:
    """Catalogue question currently shown to the user."""

    category_id: str
    index: int
    question: str
    answer: str


@dataclass
class AskedItem:
    """A question the user flagged as asked."""

    text: str
    status: Status = Status.UNSET
    original_text: str = field(default="")

    def __post_init__(self) -> None:
        if not self.original_text:
            self.original_text = self.text
