"""Report the installed Folio version, reading ``pyproject.toml`` in a checkout."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "folio"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def _read_version_from_pyproject(pyproject_path: Path) -> str:
    try:
        with pyproject_path.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
    except FileNotFoundError:
        raise RuntimeError(f"Unable to locate project metadata at {pyproject_path}") from None

    version = project.get("version")
    if not isinstance(version, str) or not version:
        raise RuntimeError(f"No [project].version in {pyproject_path}")
    return version


__all__ = ["get_project_version"]
