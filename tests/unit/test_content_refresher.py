"""Unit coverage for the DOM refresh pass."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Mapping

import pytest
from bs4 import BeautifulSoup

from folio.backend.app.localization import (
    BundleFetchError,
    BundleLoader,
    DirectoryBundleSource,
    LanguageBundle,
    Mode,
    SiteSession,
)
from folio.backend.app.services.content_refresher import (
    ContentRefresher,
    TemplateError,
    render_page,
)

SHELL = """
<html lang="xx">
<body>
  <a class="nav-link" href="#about">-</a>
  <a class="nav-link" href="#experience">-</a>
  <a class="nav-link" href="#technologies">-</a>
  <a class="nav-link" href="#education">-</a>
  <span id="current-lang-display">??</span>
  <div id="language-menu"><a data-lang="en">EN</a><a data-lang="es">ES</a></div>
  <form><input type="hidden" name="lang" value=""><button id="mode-toggle" class="btn bg-dark-card">?</button></form>
  <h1 data-key="title">placeholder</h1>
  <p data-key="body"></p>
  <p data-key="absent"></p>
  <div id="full-mode-experience" class="panel hidden"></div>
</body>
</html>
"""

EN = {
    "summary": {
        "html-lang": "en-GB",
        "title": "Hello",
        "body": "I build **reliable** services",
        "mode-toggle-text": "Show more",
        "nav-about": "About",
        "nav-experience": "Experience",
        "nav-technologies": "Technologies",
        "nav-education": "Education",
    },
    "full": {"body": "Full **story**", "mode-toggle-text": "Show less"},
}


class StaticSource:
    def __init__(self, payloads: Mapping[str, Any]) -> None:
        self.payloads = payloads
        self.calls: list[str] = []

    async def fetch(self, language: str) -> LanguageBundle:
        self.calls.append(language)
        if language not in self.payloads:
            raise BundleFetchError(language, "HTTP 404")
        return LanguageBundle.model_validate(self.payloads[language])


def _refresh(session: SiteSession, html: str = SHELL) -> BeautifulSoup:
    document = BeautifulSoup(html, "html.parser")
    asyncio.run(ContentRefresher().refresh(session, document))
    return document


def _session(payloads: Mapping[str, Any], language: str = "en", mode: Mode = Mode.SUMMARY) -> SiteSession:
    return SiteSession(BundleLoader(StaticSource(payloads)), language=language, mode=mode)


def _classes(document: BeautifulSoup, element_id: str) -> set[str]:
    return set(document.find(id=element_id).get("class", []))


def test_keyed_elements_receive_translated_markup() -> None:
    document = _refresh(_session({"en": EN}))

    assert document.find(attrs={"data-key": "title"}).decode_contents() == "Hello"
    body = document.find(attrs={"data-key": "body"})
    assert body.decode_contents() == "I build <strong>reliable</strong> services"
    assert body.strong.get_text() == "reliable"


def test_missing_keys_render_visible_marker() -> None:
    document = _refresh(_session({"en": EN}))

    assert document.find(attrs={"data-key": "absent"}).get_text() == "!!MISSING_KEY:absent!!"


def test_language_controls_are_updated() -> None:
    document = _refresh(_session({"en": EN}))

    assert document.html["lang"] == "en-GB"
    assert document.find(id="current-lang-display").get_text() == "EN"
    toggle = document.find(id="mode-toggle")
    assert toggle.get_text() == "Show more"
    assert toggle["value"] == "full"
    assert document.find("input", attrs={"name": "lang"})["value"] == "en"


def test_document_language_defaults_to_current_language() -> None:
    payload = {"summary": {k: v for k, v in EN["summary"].items() if k != "html-lang"}}
    document = _refresh(_session({"en": payload}))

    assert document.html["lang"] == "en"


def test_navigation_labels_follow_translations() -> None:
    document = _refresh(_session({"en": EN}))

    labels = [link.get_text() for link in document.select(".nav-link")]
    assert labels == ["About", "Experience", "Technologies", "Education"]


def test_language_links_preserve_mode() -> None:
    document = _refresh(_session({"en": EN}, mode=Mode.FULL))

    hrefs = [link["href"] for link in document.select("#language-menu a")]
    assert hrefs == ["?lang=en&mode=full", "?lang=es&mode=full"]


def test_full_mode_reveals_container_and_switches_toggle_style() -> None:
    document = _refresh(_session({"en": EN}, mode=Mode.FULL))

    assert "hidden" not in _classes(document, "full-mode-experience")
    assert _classes(document, "mode-toggle") == {"btn", "bg-gray-700"}
    assert document.find(id="mode-toggle").get_text() == "Show less"
    assert document.find(attrs={"data-key": "body"}).decode_contents() == "Full <strong>story</strong>"


def test_toggling_twice_restores_visibility() -> None:
    session = _session({"en": EN})
    document = BeautifulSoup(SHELL, "html.parser")
    refresher = ContentRefresher()

    async def scenario() -> list[tuple[set[str], set[str]]]:
        snapshots = []
        for _ in range(3):
            await refresher.refresh(session, document)
            snapshots.append(
                (_classes(document, "full-mode-experience"), _classes(document, "mode-toggle"))
            )
            session.toggle_mode()
        return snapshots

    initial, toggled, restored = asyncio.run(scenario())

    assert initial == ({"panel", "hidden"}, {"btn", "bg-dark-card"})
    assert toggled != initial
    assert restored == initial
    assert session.loader.fetch_count == 1


def test_failed_load_leaves_document_untouched() -> None:
    source_document = BeautifulSoup(SHELL, "html.parser")
    document = _refresh(_session({}, language="es"))

    assert str(document) == str(source_document)


def test_undecodable_default_bundle_leaves_document_untouched(tmp_path: Path) -> None:
    (tmp_path / "en.json").write_bytes(b'{"summary": {"title": "\xff\xfe"}}')
    session = SiteSession(BundleLoader(DirectoryBundleSource(tmp_path)), language="en")

    document = _refresh(session)

    assert str(document) == str(BeautifulSoup(SHELL, "html.parser"))
    assert session.bundle.is_empty


def test_missing_fixed_element_raises_template_error() -> None:
    html = SHELL.replace('id="current-lang-display"', 'id="other"')

    with pytest.raises(TemplateError):
        _refresh(_session({"en": EN}), html)


def test_render_page_serialises_document() -> None:
    html = asyncio.run(render_page(SHELL, _session({"en": EN}), ContentRefresher()))

    assert "<strong>reliable</strong>" in html
    assert 'lang="en-GB"' in html
