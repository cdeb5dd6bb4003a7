"""CLI entrypoint for the interview question study tool."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from pathlib import Path

from .models import Category, Status
from .render import render_question, render_tracker
from .service import DEFAULT_NOTES_PATH, StudyService
from .tracker import DuplicateQuestionError

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
EDIT_KEEP_COMMAND = ":b"
MENU_QUIT_COMMANDS = {"q"}
MENU_BACK_COMMANDS = {"b"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


class QuitApp(Exception):
    """Signal immediate app exit from nested menu flows."""


def _service(notes_path: Path | str, content_dir: Path | str | None) -> StudyService:
    """Create app service."""
    return StudyService(notes_path=notes_path, content_dir=content_dir)


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="qaprep", description="Interview question study tool")
    parser.add_argument("command", nargs="?", default="play", choices=["play"])
    parser.add_argument("--content-dir", type=Path, default=None, help="load categories from this directory")
    parser.add_argument("--notes-file", type=Path, default=DEFAULT_NOTES_PATH, help="notes file path")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return play_shell(notes_path=args.notes_file, content_dir=args.content_dir)


def play_shell(
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
    *,
    notes_path: Path | str = DEFAULT_NOTES_PATH,
    content_dir: Path | str | None = None,
) -> int:
    """Run persistent menu-driven shell."""
    try:
        service = _service(notes_path, content_dir)
    except (OSError, ValueError) as exc:
        logger.error("Catalogue load failed: %s", exc)
        print_fn(f"Could not load question catalogue: {exc}")
        return 1

    try:
        while True:
            print_fn("\n=== Interview Prep ===")
            print_fn("1) Browse categories")
            print_fn("2) Asked questions")
            print_fn("3) Notes")
            print_fn("4) Push changes")
            print_fn("5) Fetch changes")
            print_fn("q) Quit")
            choice = input_fn("Choose: ").strip().lower()

            if choice == "1":
                _browse_flow(service, input_fn, print_fn)
            elif choice == "2":
                _asked_flow(service, input_fn, print_fn)
            elif choice == "3":
                _notes_flow(service, input_fn, print_fn)
            elif choice == "4":
                _sync_flow(service, "push", print_fn)
            elif choice == "5":
                _sync_flow(service, "fetch", print_fn)
            elif choice in MENU_QUIT_COMMANDS:
                return 0
            else:
                print_fn("Invalid choice.")
    except QuitApp:
        return 0


def _read_menu_index(input_fn: InputFn, print_fn: PrintFn, prompt: str, size: int) -> int | None:
    """Read a 1-based menu choice and return its 0-based index, or None for back/invalid."""
    choice = input_fn(prompt).strip().lower()
    if choice in MENU_BACK_COMMANDS:
        return None
    if choice in MENU_QUIT_COMMANDS:
        raise QuitApp()
    if not choice.isdecimal():
        print_fn("Invalid choice.")
        return None
    index = int(choice) - 1
    if not (0 <= index < size):
        print_fn("Invalid choice.")
        return None
    return index


def _browse_flow(service: StudyService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Pick a category and browse its questions."""
    categories = service.list_categories()
    if not categories:
        print_fn("No categories available.")
        return

    print_fn("\n=== Categories ===")
    title_width = max(len(category.title) for category in categories)
    for idx, category in enumerate(categories, start=1):
        print_fn(f"{idx:>2}) {category.title:<{title_width}} ({len(category.questions)} questions)")
    print_fn("b) Back")
    print_fn("q) Quit")
    index = _read_menu_index(input_fn, print_fn, "Choose category: ", len(categories))
    if index is None:
        return
    _category_flow(service, categories[index], input_fn, print_fn)


def _category_flow(service: StudyService, category: Category, input_fn: InputFn, print_fn: PrintFn) -> None:
    """List questions in one category until the user goes back."""
    questions = service.get_questions_for_category(category.id)
    while True:
        print_fn(f"\n=== {category.title} ===")
        if category.description:
            print_fn(category.description)
        if not questions:
            print_fn("No questions in this category.")
            return
        for idx, question in enumerate(questions, start=1):
            print_fn(f"{idx:>2}) {question.question}")
        print_fn("b) Back")
        print_fn("q) Quit")
        index = _read_menu_index(input_fn, print_fn, "Choose question: ", len(questions))
        if index is None:
            return
        _question_flow(service, category, index, input_fn, print_fn)


def _question_flow(
    service: StudyService,
    category: Category,
    index: int,
    input_fn: InputFn,
    print_fn: PrintFn,
) -> None:
    """Show one question with its answer and offer to mark it as asked."""
    selection = service.select_question(category.id, index)
    print_fn("")
    for line in render_question(selection):
        print_fn(line)
    print_fn("\na) Mark as asked")
    print_fn("b) Back")
    print_fn("q) Quit")
    choice = input_fn("Choose: ").strip().lower()
    if choice in MENU_QUIT_COMMANDS:
        raise QuitApp()
    if choice != "a":
        return
    try:
        service.mark_current_as_asked()
    except DuplicateQuestionError as exc:
        print_fn(str(exc))
        return
    print_fn("Marked as asked.")
    for line in render_tracker(service.tracker_view()):
        print_fn(line)


def _asked_flow(service: StudyService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Show tracked questions and grade or edit them."""
    while True:
        print_fn("")
        for line in render_tracker(service.tracker_view()):
            print_fn(line)
        if len(service.tracker) == 0:
            return
        print_fn("\n1) Grade question")
        print_fn("2) Edit question")
        print_fn("b) Back")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_BACK_COMMANDS:
            return
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice == "1":
            _grade_flow(service, input_fn, print_fn)
        elif choice == "2":
            _edit_flow(service, input_fn, print_fn)
        else:
            print_fn("Invalid choice.")


def _grade_flow(service: StudyService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Assign a grade to one tracked question."""
    index = _read_menu_index(input_fn, print_fn, "Question number: ", len(service.tracker))
    if index is None:
        return
    grades = Status.gradable()
    for idx, status in enumerate(grades, start=1):
        print_fn(f"{idx}) {status.label}")
    print_fn("b) Back")
    grade_index = _read_menu_index(input_fn, print_fn, "Grade: ", len(grades))
    if grade_index is None:
        return
    service.set_status(index, grades[grade_index])
    print_fn(f"Question {index + 1}: {grades[grade_index].label}")


def _edit_flow(service: StudyService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Edit one tracked question's text in place."""
    index = _read_menu_index(input_fn, print_fn, "Question number: ", len(service.tracker))
    if index is None:
        return
    handle = service.begin_edit(index)
    print_fn(f"Current text: {handle.text}")
    print_fn("Type the new text, or :b to keep it.")
    new_text = input_fn("New text: ")
    if new_text == EDIT_KEEP_COMMAND:
        service.commit_edit(index, handle.text)
        print_fn("Edit cancelled.")
        return
    service.commit_edit(index, new_text)
    print_fn("Question updated.")


def _notes_flow(service: StudyService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """View and add study notes."""
    while True:
        print_fn("\n=== Notes ===")
        print_fn("1) View notes")
        print_fn("2) Add note")
        print_fn("b) Back")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_BACK_COMMANDS:
            return
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice == "1":
            try:
                content = service.read_notes()
            except OSError as exc:
                print_fn(f"Could not read notes: {exc}")
                continue
            if not content.strip():
                print_fn("No notes yet.")
                continue
            for line in content.rstrip("\n").split("\n"):
                print_fn(line)
        elif choice == "2":
            note = input_fn("Note: ")
            try:
                service.add_note(note)
            except ValueError as exc:
                print_fn(str(exc))
                continue
            except OSError as exc:
                print_fn(f"Could not save notes: {exc}")
                continue
            print_fn("Note saved.")
        else:
            print_fn("Invalid choice.")


def _sync_flow(service: StudyService, direction: str, print_fn: PrintFn) -> None:
    """Print manual git steps for sharing notes."""
    print_fn("")
    for line in service.sync_instructions(direction):
        print_fn(line)


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
