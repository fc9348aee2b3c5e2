"""Asynchronous bundle loading with a single default-language fallback.

The loader owns the bundle for one rendering session. Only one bundle is held
at a time: a successful load replaces the previous bundle wholesale and a
failed load of the default language leaves the session empty.

Overlapping ``load`` calls are ordered by a request token. A fetch that
resolves after a newer request has been issued is discarded, so the language
requested last is the one that ends up loaded regardless of which network
response arrives first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import count

from .bundle import BundleFetchError, LanguageBundle
from .sources import BundleSource, normalise_language

_LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
SUPERSEDED_REASON = "superseded"


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadSuccess:
    """A bundle is available for ``language``."""

    language: str
    bundle: LanguageBundle
    requested: str | None = None
    fetched: bool = True

    @property
    def ok(self) -> bool:
        return True

    @property
    def fell_back(self) -> bool:
        return self.requested is not None and self.requested != self.language


@dataclass(frozen=True)
class LoadFailure:
    """No bundle could be loaded for ``language``."""

    language: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


LoadResult = LoadSuccess | LoadFailure


class BundleLoader:
    """Fetch language bundles from a source and hold the active one."""

    def __init__(self, source: BundleSource, *, default_language: str = DEFAULT_LANGUAGE) -> None:
        self.source = source
        self.default_language = normalise_language(default_language) or DEFAULT_LANGUAGE
        self.language: str | None = None
        self.bundle = LanguageBundle.empty()
        self.state = LoadState.UNLOADED
        self.fetch_count = 0
        self._tokens = count(1)
        self._latest_token = 0

    @property
    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED and not self.bundle.is_empty

    async def load(self, language: str) -> LoadResult:
        """Load ``language``, falling back to the default language once."""

        requested = normalise_language(language) or self.default_language
        if requested == self.language and self.is_loaded:
            return LoadSuccess(language=requested, bundle=self.bundle, fetched=False)

        result = await self._fetch(requested)
        if result.ok or result.reason == SUPERSEDED_REASON:
            return result

        if requested != self.default_language:
            _LOGGER.warning(
                "Falling back to %r after failing to load %r",
                self.default_language,
                requested,
            )
            fallback = await self.load(self.default_language)
            if isinstance(fallback, LoadSuccess):
                return LoadSuccess(
                    language=fallback.language,
                    bundle=fallback.bundle,
                    requested=requested,
                    fetched=fallback.fetched,
                )
            return fallback

        _LOGGER.error("Default language %r could not be loaded; no translations available", requested)
        self.bundle = LanguageBundle.empty()
        self.state = LoadState.FAILED
        return result

    async def _fetch(self, language: str) -> LoadResult:
        token = next(self._tokens)
        self._latest_token = token
        self.state = LoadState.LOADING
        self.fetch_count += 1

        try:
            bundle = await self.source.fetch(language)
            if bundle.is_empty:
                raise BundleFetchError(language, "bundle contains no translations")
        except BundleFetchError as error:
            if token != self._latest_token:
                return LoadFailure(language=language, reason=SUPERSEDED_REASON)
            _LOGGER.error("Error loading translations for %r: %s", language, error.reason)
            self.state = LoadState.UNLOADED if self.bundle.is_empty else LoadState.LOADED
            return LoadFailure(language=language, reason=error.reason)

        if token != self._latest_token:
            _LOGGER.info("Discarding bundle for %r; a newer language request is pending", language)
            return LoadFailure(language=language, reason=SUPERSEDED_REASON)

        self.bundle = bundle
        self.language = language
        self.state = LoadState.LOADED
        _LOGGER.info("Translations loaded for: %s", language)
        return LoadSuccess(language=language, bundle=bundle)


__all__ = [
    "BundleLoader",
    "DEFAULT_LANGUAGE",
    "LoadFailure",
    "LoadResult",
    "LoadState",
    "LoadSuccess",
    "SUPERSEDED_REASON",
]
