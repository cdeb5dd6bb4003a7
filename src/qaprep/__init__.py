"""qaprep: interview question study tool."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]


def _source_tree_version() -> str | None:
    """Read [project].version from the nearest pyproject.toml when running from a checkout."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
        project = data.get("project", {})
        if project.get("name") == "qaprep" and isinstance(project.get("version"), str):
            return project["version"]
    return None


def _resolve_version() -> str:
    source_version = _source_tree_version()
    if source_version is not None:
        return source_version
    try:
        return version("qaprep")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _resolve_version()
