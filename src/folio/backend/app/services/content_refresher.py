"""Apply the active language bundle and content mode to the HTML shell."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from bs4 import BeautifulSoup, Tag

from folio.backend.app.localization import Mode, SiteSession, Translator, render_markup
from folio.backend.config.schema import TemplateConfig

_LOGGER = logging.getLogger(__name__)

HTML_PARSER = "html.parser"
MODE_TOGGLE_TEXT_KEY = "mode-toggle-text"


class TemplateError(LookupError):
    """Raised when the HTML shell lacks an element the renderer relies on."""


class ContentRefresher:
    """Re-applies translations and mode-dependent visibility to a document."""

    def __init__(self, template: TemplateConfig | None = None) -> None:
        self.template = template or TemplateConfig()

    async def refresh(self, session: SiteSession, document: BeautifulSoup) -> BeautifulSoup:
        await session.ensure_loaded()

        if session.bundle.is_empty:
            _LOGGER.error("Critical error: No translations loaded.")
            return document

        translator = session.translator
        self._translate_keyed_elements(document, translator)
        self._update_language_controls(document, session, translator)
        self._apply_mode_visibility(document, session.mode)
        self._update_navigation(document, translator)
        self._update_language_links(document, session)
        return document

    def _require(self, document: BeautifulSoup, element_id: str) -> Tag:
        element = document.find(id=element_id)
        if not isinstance(element, Tag):
            raise TemplateError(f"Template is missing required element #{element_id}")
        return element

    def _translate_keyed_elements(self, document: BeautifulSoup, translator: Translator) -> None:
        attribute = self.template.key_attribute
        for element in document.find_all(attrs={attribute: True}):
            html = render_markup(translator(element[attribute]))
            element.clear()
            fragment = BeautifulSoup(html, HTML_PARSER)
            for node in list(fragment.contents):
                element.append(node.extract())

    def _update_language_controls(
        self,
        document: BeautifulSoup,
        session: SiteSession,
        translator: Translator,
    ) -> None:
        root = document.find("html")
        if isinstance(root, Tag):
            root["lang"] = session.bundle.html_lang or session.language

        self._require(document, self.template.language_display).string = session.language.upper()

        toggle = self._require(document, self.template.mode_toggle)
        toggle.string = translator(MODE_TOGGLE_TEXT_KEY)
        toggle["value"] = session.mode.opposite.value

        form = toggle.find_parent("form")
        if isinstance(form, Tag):
            language_input = form.find("input", attrs={"name": "lang"})
            if isinstance(language_input, Tag):
                language_input["value"] = session.language

    def _apply_mode_visibility(self, document: BeautifulSoup, mode: Mode) -> None:
        classes = self.template.classes
        container = self._require(document, self.template.full_mode_container)
        toggle = self._require(document, self.template.mode_toggle)

        if mode is Mode.FULL:
            _remove_class(container, classes.hidden)
            _add_class(toggle, classes.toggle_active)
            _remove_class(toggle, classes.toggle_inactive)
        else:
            _add_class(container, classes.hidden)
            _add_class(toggle, classes.toggle_inactive)
            _remove_class(toggle, classes.toggle_active)

    def _update_navigation(self, document: BeautifulSoup, translator: Translator) -> None:
        for section in self.template.nav_sections:
            link = document.select_one(f'.nav-link[href="#{section}"]')
            if link is None:
                raise TemplateError(f"Template is missing the navigation link for #{section}")
            link.string = translator(f"nav-{section}")

    def _update_language_links(self, document: BeautifulSoup, session: SiteSession) -> None:
        menu = document.find(id=self.template.language_menu)
        if not isinstance(menu, Tag):
            return
        for link in menu.find_all("a", attrs={"data-lang": True}):
            query = urlencode({"lang": link["data-lang"], "mode": session.mode.value})
            link["href"] = f"?{query}"


def _class_list(element: Tag) -> list[str]:
    value = element.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _add_class(element: Tag, name: str) -> None:
    classes = _class_list(element)
    if name not in classes:
        classes.append(name)
    element["class"] = classes


def _remove_class(element: Tag, name: str) -> None:
    classes = [value for value in _class_list(element) if value != name]
    if classes:
        element["class"] = classes
    elif element.has_attr("class"):
        del element["class"]


async def render_page(html: str, session: SiteSession, refresher: ContentRefresher) -> str:
    """Parse ``html``, refresh it for ``session`` and serialise the result."""

    document = BeautifulSoup(html, HTML_PARSER)
    await refresher.refresh(session, document)
    return str(document)


__all__ = ["ContentRefresher", "MODE_TOGGLE_TEXT_KEY", "TemplateError", "render_page"]
