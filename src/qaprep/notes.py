"""File-backed study notes stored in a plain text `qa_database` file."""

from __future__ import annotations

import logging
from pathlib import Path

NOTES_FILENAME = "qa_database"

logger = logging.getLogger(__name__)


class NotesStore:
    """Read and write free-form notes in one text file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read(self) -> str:
        """Return note content, empty when the file does not exist yet."""
        if not self.path.exists():
            logger.debug("Notes file %s does not exist yet", self.path)
            return ""
        logger.debug("Reading notes from %s", self.path)
        return self.path.read_text(encoding="utf-8")

    def save(self, text: str) -> None:
        """Overwrite notes with text."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d characters of notes to %s", len(text), self.path)

    def append(self, note: str) -> str:
        """Append one note line and return the new content."""
        line = note.strip()
        if not line:
            raise ValueError("Note text is required.")
        current = self.read()
        if current and not current.endswith("\n"):
            current += "\n"
        updated = f"{current}{line}\n"
        self.save(updated)
        return updated
