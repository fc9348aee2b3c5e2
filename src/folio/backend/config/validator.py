"""Utilities for validating the site configuration against the HTML shell."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from bs4 import BeautifulSoup

from .schema import ConfigurationError, SiteConfiguration, TemplateConfig
from .site_config import load_site_configuration

DEFAULT_TEMPLATE = Path(__file__).resolve().parents[3] / "frontend" / "index.html"


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_classes(template: TemplateConfig) -> list[str]:
    errors: list[str] = []
    classes = template.classes
    values = [classes.hidden, classes.toggle_active, classes.toggle_inactive]

    if any(not value.strip() or " " in value for value in values):
        errors.append(_format_scope("template.classes", "class names must be single tokens"))

    if classes.toggle_active == classes.toggle_inactive:
        errors.append(
            _format_scope("template.classes", "active and inactive toggle classes must differ")
        )
    return errors


def _validate_nav_sections(template: TemplateConfig) -> list[str]:
    duplicates = [name for name, count in Counter(template.nav_sections).items() if count > 1]
    if duplicates:
        return [
            _format_scope(
                "template.nav_sections", f"duplicate sections detected: {sorted(duplicates)}"
            )
        ]
    return []


def validate_template_markup(template: TemplateConfig, html: str) -> list[str]:
    """Check that ``html`` carries every element the renderer requires."""

    document = BeautifulSoup(html, "html.parser")
    errors: list[str] = []

    required_ids = {
        "language_display": template.language_display,
        "mode_toggle": template.mode_toggle,
        "full_mode_container": template.full_mode_container,
    }
    for field, element_id in required_ids.items():
        if document.find(id=element_id) is None:
            errors.append(_format_scope(f"template.{field}", f"#{element_id} not found in markup"))

    for section in template.nav_sections:
        if document.select_one(f'.nav-link[href="#{section}"]') is None:
            errors.append(
                _format_scope("template.nav_sections", f"no .nav-link pointing at #{section}")
            )

    if not document.find_all(attrs={template.key_attribute: True}):
        errors.append(
            _format_scope(
                "template.key_attribute", f"no elements carry {template.key_attribute!r}"
            )
        )
    return errors


def validate_site_configuration(
    config: SiteConfiguration,
    template_path: Path = DEFAULT_TEMPLATE,
) -> list[str]:
    """Return human readable issues found in ``config`` and its template."""

    errors: list[str] = []
    errors.extend(_validate_classes(config.template))
    errors.extend(_validate_nav_sections(config.template))

    if not template_path.exists():
        errors.append(_format_scope("template", f"markup file missing: {template_path}"))
        return errors

    errors.extend(
        validate_template_markup(config.template, template_path.read_text(encoding="utf-8"))
    )
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the Folio site configuration and HTML shell.",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=DEFAULT_TEMPLATE,
        help="Path to the HTML shell (defaults to src/frontend/index.html)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_site_configuration()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[site] failed to load configuration: {error}")
        return 1

    issues = validate_site_configuration(config, args.template)
    if issues:
        print(f"[site] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("[site] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
