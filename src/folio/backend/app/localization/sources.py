"""Bundle sources backed by package resources, directories or HTTP."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

import httpx

from folio.backend.config.schema import LANGUAGE_CODE_PATTERN, BundleSourceConfig

from .bundle import BundleFetchError, LanguageBundle

DEFAULT_TRANSLATIONS_PACKAGE = "folio.translations"
_NON_BUNDLE_FILES = frozenset({"metadata.json"})


class BundleSource(Protocol):
    """Anything able to fetch a language bundle asynchronously."""

    async def fetch(self, language: str) -> LanguageBundle:
        ...


def normalise_language(language: str | None) -> str:
    """Reduce a language tag such as ``es-AR`` to its primary subtag."""

    if not language:
        return ""
    return language.strip().lower().replace("_", "-").split("-")[0]


def _validated_language(language: str) -> str:
    normalized = normalise_language(language)
    if not LANGUAGE_CODE_PATTERN.match(normalized):
        raise BundleFetchError(language, "invalid language code")
    return normalized


def _decode(language: str, raw: str | bytes) -> LanguageBundle:
    try:
        payload: Any = json.loads(raw)
    except ValueError as error:
        raise BundleFetchError(language, f"invalid JSON: {error}") from error
    return LanguageBundle.from_payload(language, payload)


class PackageBundleSource:
    """Read ``<language>.json`` files shipped inside a Python package."""

    def __init__(self, package: str = DEFAULT_TRANSLATIONS_PACKAGE) -> None:
        self.package = package

    def _root(self):
        try:
            return resources.files(self.package)
        except ModuleNotFoundError:
            return None

    def available_languages(self) -> tuple[str, ...]:
        root = self._root()
        if root is None:
            return ()
        return tuple(
            sorted(
                entry.name.removesuffix(".json")
                for entry in root.iterdir()
                if entry.name.endswith(".json") and entry.name not in _NON_BUNDLE_FILES
            )
        )

    async def fetch(self, language: str) -> LanguageBundle:
        code = _validated_language(language)
        root = self._root()
        if root is None:
            raise BundleFetchError(code, f"translations package {self.package!r} not found")

        resource = root.joinpath(f"{code}.json")
        if not resource.is_file():
            raise BundleFetchError(code, "bundle not found")
        return _decode(code, resource.read_bytes())


class DirectoryBundleSource:
    """Read ``<language>.json`` files from a directory on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def available_languages(self) -> tuple[str, ...]:
        if not self.path.is_dir():
            return ()
        return tuple(
            sorted(
                entry.stem
                for entry in self.path.glob("*.json")
                if entry.name not in _NON_BUNDLE_FILES
            )
        )

    async def fetch(self, language: str) -> LanguageBundle:
        code = _validated_language(language)
        bundle_path = self.path / f"{code}.json"
        try:
            raw = bundle_path.read_bytes()
        except FileNotFoundError:
            raise BundleFetchError(code, "bundle not found") from None
        except OSError as error:
            raise BundleFetchError(code, str(error)) from error
        return _decode(code, raw)


class HttpBundleSource:
    """Fetch ``<base_url>/<language>.json`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    def bundle_url(self, language: str) -> str:
        return f"{self.base_url}/{language}.json"

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.get(url, headers={"Accept": "application/json"})

    async def fetch(self, language: str) -> LanguageBundle:
        code = _validated_language(language)
        url = self.bundle_url(code)
        try:
            if self._client is not None:
                response = await self._get(self._client, url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await self._get(client, url)
        except httpx.HTTPError as error:
            raise BundleFetchError(code, f"request failed: {error}") from error

        if not response.is_success:
            raise BundleFetchError(code, f"HTTP {response.status_code}")
        return _decode(code, response.content)


def build_bundle_source(
    config: BundleSourceConfig,
) -> PackageBundleSource | DirectoryBundleSource | HttpBundleSource:
    """Instantiate the source described by the site configuration."""

    if config.source == "http":
        return HttpBundleSource(config.base_url or "", timeout=config.timeout_seconds)
    if config.source == "directory":
        return DirectoryBundleSource(config.path or ".")
    return PackageBundleSource(config.package)


__all__ = [
    "BundleSource",
    "DEFAULT_TRANSLATIONS_PACKAGE",
    "DirectoryBundleSource",
    "HttpBundleSource",
    "PackageBundleSource",
    "build_bundle_source",
    "normalise_language",
]
