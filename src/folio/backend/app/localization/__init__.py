"""Translation helpers shared by the page renderer and the bundle endpoints."""

from .bundle import BundleFetchError, LanguageBundle, Mode
from .loader import BundleLoader, LoadFailure, LoadResult, LoadState, LoadSuccess
from .markup import render_markup
from .resolver import Translator, missing_key_marker, resolve
from .session import SiteSession, detect_language
from .sources import (
    BundleSource,
    DirectoryBundleSource,
    HttpBundleSource,
    PackageBundleSource,
    build_bundle_source,
    normalise_language,
)

__all__ = [
    "BundleFetchError",
    "BundleLoader",
    "BundleSource",
    "DirectoryBundleSource",
    "HttpBundleSource",
    "LanguageBundle",
    "LoadFailure",
    "LoadResult",
    "LoadState",
    "LoadSuccess",
    "Mode",
    "PackageBundleSource",
    "SiteSession",
    "Translator",
    "build_bundle_source",
    "detect_language",
    "missing_key_marker",
    "normalise_language",
    "render_markup",
    "resolve",
]
