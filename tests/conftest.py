from __future__ import annotations

import json
import shutil
import sys
from collections.abc import Iterator
from pathlib import Path
from uuid import uuid4

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _tmp_path_fixture() -> Iterator[Path]:
    """Provide per-test temporary directory path inside the workspace.

    Overrides pytest's builtin ``tmp_path`` so notes files and catalogue
    fixtures land under ``.tmp_pytest/`` in the project directory.
    """
    base = ROOT / ".tmp_pytest"
    base.mkdir(parents=True, exist_ok=True)
    path = base / str(uuid4())
    path.mkdir(parents=True, exist_ok=False)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        try:
            next(base.iterdir())
        except StopIteration:
            base.rmdir()
        except FileNotFoundError:
            pass


tmp_path = pytest.fixture(name="tmp_path")(_tmp_path_fixture)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Small two-category catalogue written to disk."""
    root = tmp_path / "catalogue"
    root.mkdir(parents=True, exist_ok=True)
    first = {
        "id": "oop",
        "title": "OOP",
        "order": 1,
        "description": "Objects",
        "questions": [
            {"id": "poly", "question": "What is polymorphism?", "answer": "<p>Many forms.</p>"},
            {"id": "enc", "question": "What is encapsulation?", "answer": "<p>Hiding state.</p>"},
        ],
    }
    second = {
        "id": "db",
        "title": "Databases",
        "order": 2,
        "questions": [
            {"id": "acid", "question": "What does ACID stand for?", "answer": "<ul><li>Atomicity</li></ul>"},
        ],
    }
    (root / "oop.json").write_text(json.dumps(first), encoding="utf-8")
    (root / "db.json").write_text(json.dumps(second), encoding="utf-8")
    return root
