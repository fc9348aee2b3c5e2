"""Unit coverage for the project version helper."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

import pytest

from folio.backend import version
from folio.backend.version import get_project_version

PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"


def read_pyproject_version() -> str:
    with PYPROJECT_PATH.open("rb") as handle:
        return tomllib.load(handle)["project"]["version"]


def test_get_project_version_matches_pyproject(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    expected = read_pyproject_version()

    monkeypatch.setattr(metadata, "version", lambda package: expected)

    assert get_project_version() == expected


def test_get_project_version_falls_back_to_pyproject(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    expected = read_pyproject_version()

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == expected
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_pyproject_without_version_is_rejected(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "folio"\n# version = "9.9.9"\n', encoding="utf-8")

    with pytest.raises(RuntimeError):
        version._read_version_from_pyproject(pyproject)


def test_missing_pyproject_is_reported(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="Unable to locate"):
        version._read_version_from_pyproject(tmp_path / "pyproject.toml")
