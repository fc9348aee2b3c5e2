#!/usr/bin/env python3
"""Pre-render the HTML shell for every language and content mode.

Usage:
    python scripts/render_site.py [--output DIR] [--base-url URL] [--languages en es]

Produces:
    DIR/
      index.html           - default language, default mode
      <lang>/summary.html
      <lang>/full.html
      assets/              - copied stylesheet assets
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from folio.backend.app.localization import (  # noqa: E402
    BundleLoader,
    BundleSource,
    HttpBundleSource,
    Mode,
    SiteSession,
    build_bundle_source,
    normalise_language,
)
from folio.backend.app.services.content_refresher import ContentRefresher, render_page  # noqa: E402
from folio.backend.config.site_config import load_site_configuration  # noqa: E402

FRONTEND_DIR = SRC_DIR / "frontend"
DEFAULT_OUTPUT = REPO_ROOT / "build" / "site"

_LOGGER = logging.getLogger("render_site")


async def render_all(
    template: str,
    output: Path,
    languages: Sequence[str],
    *,
    source: BundleSource,
    refresher: ContentRefresher,
    default_language: str,
    default_mode: Mode,
) -> list[Path]:
    """Render each language/mode pair; returns the written paths."""

    written: list[Path] = []
    codes = dict.fromkeys(code for code in map(normalise_language, languages) if code)
    for language in codes:
        # One loader per language keeps the single-bundle invariant per page set.
        loader = BundleLoader(source, default_language=default_language)
        session = SiteSession(loader, language=language)
        for mode in Mode:
            session.set_mode(mode)
            html = await render_page(template, session, refresher)
            if session.language != language:
                _LOGGER.warning("Skipping %s: bundle fell back to %s", language, session.language)
                break

            target = output / language / f"{mode.value}.html"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            written.append(target)

            if language == default_language and mode is default_mode:
                index = output / "index.html"
                index.write_text(html, encoding="utf-8")
                written.append(index)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pre-render the Folio site")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument("--base-url", help="Fetch bundles from <base-url>/<lang>.json")
    parser.add_argument("--languages", nargs="*", help="Languages to render (default: all)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_site_configuration()
    if args.base_url:
        source = HttpBundleSource(args.base_url, timeout=config.bundles.timeout_seconds)
    else:
        source = build_bundle_source(config.bundles)

    languages = args.languages
    if not languages:
        lister = getattr(source, "available_languages", None)
        languages = list(lister()) if callable(lister) else [config.default_language]
    if not languages:
        print("No languages to render.")
        return 1

    template = (FRONTEND_DIR / "index.html").read_text(encoding="utf-8")
    written = asyncio.run(
        render_all(
            template,
            args.output,
            languages,
            source=source,
            refresher=ContentRefresher(config.template),
            default_language=config.default_language,
            default_mode=Mode.parse(config.default_mode),
        )
    )

    assets = FRONTEND_DIR / "assets"
    if assets.is_dir():
        shutil.copytree(assets, args.output / "assets", dirs_exist_ok=True)

    print(f"Rendered {len(written)} page(s) into {args.output}")
    return 0 if written else 1


if __name__ == "__main__":
    sys.exit(main())
