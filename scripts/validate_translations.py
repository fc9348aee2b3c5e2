#!/usr/bin/env python3
"""Validate language bundles against the HTML shell and emit shared metadata."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable

from bs4 import BeautifulSoup

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from folio.backend.app.localization import BundleFetchError, LanguageBundle  # noqa: E402
from folio.backend.app.services.content_refresher import MODE_TOGGLE_TEXT_KEY  # noqa: E402
from folio.backend.config.schema import TemplateConfig  # noqa: E402

TRANSLATIONS_DIR = SRC_DIR / "folio" / "translations"
FRONTEND_HTML = SRC_DIR / "frontend" / "index.html"
METADATA_PATH = TRANSLATIONS_DIR / "metadata.json"


class ValidationError(Exception):
    """Raised when validation detects unrecoverable issues."""


def load_bundles(directory: Path = TRANSLATIONS_DIR) -> dict[str, LanguageBundle]:
    if not directory.is_dir():
        raise ValidationError(f"Missing translations directory: {directory}")

    bundles: dict[str, LanguageBundle] = {}
    for path in sorted(directory.glob("*.json")):
        if path.name == METADATA_PATH.name:
            continue
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        try:
            bundles[path.stem] = LanguageBundle.from_payload(path.stem, payload)
        except BundleFetchError as error:
            raise ValidationError(f"{path.name}: {error.reason}") from error

    if not bundles:
        raise ValidationError("No language bundles discovered")
    return bundles


def template_keys(html: str, template: TemplateConfig | None = None) -> set[str]:
    """Return every key the renderer resolves for ``html``."""

    template = template or TemplateConfig()
    document = BeautifulSoup(html, "html.parser")
    keys = {
        str(element[template.key_attribute])
        for element in document.find_all(attrs={template.key_attribute: True})
    }
    keys.add(MODE_TOGGLE_TEXT_KEY)
    keys.update(f"nav-{section}" for section in template.nav_sections)
    return keys


def missing_template_keys(bundles: dict[str, LanguageBundle], keys: Iterable[str]) -> list[str]:
    issues: list[str] = []
    required = sorted(keys)
    for language, bundle in sorted(bundles.items()):
        missing = [key for key in required if not bundle.summary.get(key)]
        if missing:
            issues.append(
                f"Bundle '{language}' missing {len(missing)} summary keys: {', '.join(missing)}"
            )
    return issues


def missing_keys(bundles: dict[str, LanguageBundle], base_language: str) -> list[str]:
    issues: list[str] = []
    base = bundles.get(base_language)
    if base is None:
        return issues

    for section in ("summary", "full"):
        expected = set(getattr(base, section))
        for language, bundle in sorted(bundles.items()):
            missing = expected - set(getattr(bundle, section))
            if missing:
                issues.append(
                    f"Bundle '{language}' missing {len(missing)} {section} keys: "
                    f"{', '.join(sorted(missing))}"
                )
    return issues


def full_only_keys(bundles: dict[str, LanguageBundle]) -> list[str]:
    """Keys defined only in ``full``; summary mode renders them as missing."""

    notes: list[str] = []
    for language, bundle in sorted(bundles.items()):
        orphaned = sorted(set(bundle.full) - set(bundle.summary))
        if orphaned:
            notes.append(f"Bundle '{language}' has full-only keys: {', '.join(orphaned)}")
    return notes


def write_metadata(
    bundles: dict[str, LanguageBundle],
    base_language: str,
    metadata_path: Path = METADATA_PATH,
) -> dict:
    base = bundles[base_language]
    metadata = {
        "languages": sorted(bundles),
        "base_language": base_language,
        "summary": {"keys": sorted(base.summary)},
        "full": {"keys": sorted(base.full)},
    }
    metadata_path.parent.mkdir(parents=True, exist_ok=True)
    metadata_path.write_text(
        json.dumps(metadata, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return metadata


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--fail-on-full-only",
        action="store_true",
        help="Exit with an error if a key exists only in the full section",
    )
    parser.add_argument("--no-metadata", action="store_true", help="Skip writing metadata.json")
    args = parser.parse_args(argv)

    try:
        bundles = load_bundles()
    except ValidationError as error:
        print(f"[error] {error}")
        return 1

    base_language = "en" if "en" in bundles else sorted(bundles)[0]

    template_issues = missing_template_keys(
        bundles, template_keys(FRONTEND_HTML.read_text(encoding="utf-8"))
    )
    missing = missing_keys(bundles, base_language)
    orphaned = full_only_keys(bundles)

    if not args.no_metadata:
        write_metadata(bundles, base_language)

    for issue in template_issues:
        print(f"[template] {issue}")
    for issue in missing:
        print(f"[missing] {issue}")
    for note in orphaned:
        print(f"[full-only] {note}")

    if template_issues or missing or (orphaned and args.fail_on_full_only):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
