"""Application service for catalogue browsing, asked-question tracking, and notes."""

from __future__ import annotations

from pathlib import Path

from .content_loader import load_catalogue, load_catalogue_from_dir
from .models import Category, Question, QuestionSelection, Status
from .notes import NOTES_FILENAME, NotesStore
from .render import TrackerView, build_tracker_view
from .tracker import EditHandle, TrackerStore

DEFAULT_NOTES_PATH = Path(".qaprep") / NOTES_FILENAME
SYNC_DIRECTIONS = ("push", "fetch")


class NoQuestionSelectedError(LookupError):
    """Raised when marking as asked before any question was selected."""


class StudyService:
    """Owns the catalogue, the current selection, the tracker, and notes."""

    def __init__(
        self,
        notes_path: Path | str = DEFAULT_NOTES_PATH,
        content_dir: Path | str | None = None,
    ) -> None:
        """Load catalogue content and set up session state."""
        if content_dir is None:
            self.categories = load_catalogue()
        else:
            self.categories = load_catalogue_from_dir(Path(content_dir))
        self.tracker = TrackerStore()
        self.notes = NotesStore(notes_path)
        self._selection: QuestionSelection | None = None

    def list_categories(self) -> list[Category]:
        """Return categories in display order."""
        return list(self.categories.values())

    def get_questions_for_category(self, category_id: str) -> list[Question]:
        """Return ordered questions for one category."""
        return list(self.categories[category_id].questions)

    def select_question(self, category_id: str, index: int) -> QuestionSelection:
        """Make one catalogue question the current selection."""
        questions = self.get_questions_for_category(category_id)
        if not (0 <= index < len(questions)):
            raise IndexError(f"Question index {index} out of range for category '{category_id}'.")
        question = questions[index]
        self._selection = QuestionSelection(
            category_id=category_id,
            index=index,
            question=question.question,
            answer=question.answer,
        )
        return self._selection

    @property
    def current_selection(self) -> QuestionSelection | None:
        """Question currently on display, if any."""
        return self._selection

    def mark_current_as_asked(self) -> int:
        """Track the selected question and return its tracker index."""
        if self._selection is None:
            raise NoQuestionSelectedError("Select a question first.")
        return self.tracker.add_asked_question(self._selection.question)

    def mark_as_asked(self, text: str) -> int:
        """Track a question by text."""
        return self.tracker.add_asked_question(text)

    def set_status(self, index: int, status: Status) -> None:
        """Grade one tracked question."""
        self.tracker.set_status(index, status)

    def begin_edit(self, index: int) -> EditHandle:
        """Start editing one tracked question."""
        return self.tracker.begin_edit(index)

    def commit_edit(self, index: int, new_text: str) -> None:
        """Replace one tracked question's text."""
        self.tracker.commit_edit(index, new_text)

    def tracker_view(self) -> TrackerView:
        """Return a fresh view-model of tracked questions."""
        return build_tracker_view(self.tracker)

    def read_notes(self) -> str:
        """Return saved notes."""
        return self.notes.read()

    def add_note(self, note: str) -> str:
        """Append one note and return all notes."""
        return self.notes.append(note)

    def sync_instructions(self, direction: str) -> list[str]:
        """Return manual git steps for sharing or pulling notes."""
        if direction == "push":
            return [
                "To push your changes, run:",
                f"  git add {self.notes.path.as_posix()}",
                '  git commit -m "Update notes"',
                "  git push",
            ]
        if direction == "fetch":
            return [
                "To fetch the latest changes, run:",
                "  git pull",
            ]
        raise ValueError(f"Unknown sync direction '{direction}'. Expected one of: {', '.join(SYNC_DIRECTIONS)}.")
