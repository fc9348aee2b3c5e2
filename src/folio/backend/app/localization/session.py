"""Explicit rendering context replacing page-global language and mode state."""

from __future__ import annotations

from .bundle import LanguageBundle, Mode
from .loader import BundleLoader, LoadResult
from .resolver import Translator
from .sources import normalise_language


def detect_language(accept_language: str | None, default: str) -> str:
    """Return the primary subtag of the first preferred language, or ``default``."""

    if not accept_language:
        return default
    first = accept_language.split(",")[0].split(";")[0]
    return normalise_language(first) or default


class SiteSession:
    """Current language, content mode and bundle for one rendering flow."""

    def __init__(
        self,
        loader: BundleLoader,
        *,
        language: str | None = None,
        mode: Mode | str = Mode.SUMMARY,
    ) -> None:
        self.loader = loader
        self._requested_language = normalise_language(language) or loader.default_language
        self.mode = Mode.parse(mode)

    @property
    def language(self) -> str:
        """The loaded language, or the requested one before any load."""

        return self.loader.language or self._requested_language

    @property
    def bundle(self) -> LanguageBundle:
        return self.loader.bundle

    @property
    def translator(self) -> Translator:
        return Translator(bundle=self.loader.bundle, mode=self.mode)

    async def ensure_loaded(self) -> LoadResult | None:
        """Load the requested language when no bundle is held yet."""

        if not self.loader.bundle.is_empty:
            return None
        return await self.loader.load(self._requested_language)

    async def switch_language(self, language: str) -> LoadResult:
        self._requested_language = normalise_language(language) or self.loader.default_language
        return await self.loader.load(self._requested_language)

    def set_mode(self, mode: Mode | str) -> Mode:
        self.mode = Mode.parse(mode)
        return self.mode

    def toggle_mode(self) -> Mode:
        self.mode = self.mode.opposite
        return self.mode


__all__ = ["SiteSession", "detect_language"]
