"""Load the question catalogue from bundled JSON resources."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path

from .models import Category, Question

CONTENT_PACKAGE = "qaprep.content.categories"
REQUIRED_CATEGORY_KEYS = ("id", "title")

logger = logging.getLogger(__name__)


def _question_from_dict(category_id: str, position: int, raw: object) -> Question:
    """Build a question from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError(f"Question {position} in category '{category_id}' must be a JSON object.")
    question_id = str(raw.get("id", "")).strip() or f"{category_id}-{position}"
    text = str(raw.get("question", "")).strip()
    if not text:
        raise ValueError(f"Question '{question_id}' has empty text.")
    return Question(
        id=question_id,
        category_id=category_id,
        question=text,
        answer=str(raw.get("answer", "")).strip(),
    )


def _category_from_dict(raw: object) -> Category:
    """Build a category from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError("Category file root must be a JSON object.")
    for key in REQUIRED_CATEGORY_KEYS:
        if key not in raw:
            raise ValueError(f"Category file is missing '{key}'.")
    category_id = str(raw["id"])
    questions = [
        _question_from_dict(category_id, position, item)
        for position, item in enumerate(raw.get("questions", []), start=1)
    ]
    seen_text: set[str] = set()
    for question in questions:
        if question.question in seen_text:
            raise ValueError(f"Category '{category_id}' repeats question text: {question.question}")
        seen_text.add(question.question)
    return Category(
        id=category_id,
        title=str(raw["title"]),
        order=int(raw.get("order", 0)),
        description=str(raw.get("description", "")),
        questions=questions,
    )


def load_catalogue() -> dict[str, Category]:
    """Load bundled categories."""
    raws: list[object] = []
    for entry in sorted(resources.files(CONTENT_PACKAGE).iterdir(), key=lambda item: item.name):
        if entry.name.endswith(".json"):
            raws.append(json.loads(entry.read_text(encoding="utf-8-sig")))
    return _build_catalogue(raws)


def load_catalogue_from_dir(path: Path) -> dict[str, Category]:
    """Load categories from directory for tests/tools."""
    if not path.is_dir():
        raise ValueError(f"Content directory does not exist: {path}")
    raws = [json.loads(file_path.read_text(encoding="utf-8-sig")) for file_path in sorted(path.glob("*.json"))]
    return _build_catalogue(raws)


def _build_catalogue(raws: list[object]) -> dict[str, Category]:
    """Validate raw categories and key them by id in display order."""
    categories: dict[str, Category] = {}
    for raw in raws:
        category = _category_from_dict(raw)
        if category.id in categories:
            raise ValueError(f"Duplicate category id: {category.id}")
        categories[category.id] = category
    _validate_unique_question_ids(categories)

    ordered = sorted(categories.values(), key=lambda item: (item.order, item.id))
    logger.debug(
        "Loaded %d categories with %d questions",
        len(ordered),
        sum(len(category.questions) for category in ordered),
    )
    return {category.id: category for category in ordered}


def _validate_unique_question_ids(categories: dict[str, Category]) -> None:
    """Validate that question IDs are globally unique across all categories."""
    seen: dict[str, str] = {}
    for category in categories.values():
        for question in category.questions:
            previous = seen.get(question.id)
            if previous is not None:
                raise ValueError(f"Duplicate question id: {question.id} (in {previous} and {category.id})")
            seen[question.id] = category.id
