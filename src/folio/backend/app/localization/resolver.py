"""Translation lookup with mode-aware fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .bundle import LanguageBundle, Mode

MISSING_KEY_TEMPLATE = "!!MISSING_KEY:{key}!!"


def missing_key_marker(key: str) -> str:
    """Return the visible placeholder rendered for untranslated keys."""

    return MISSING_KEY_TEMPLATE.format(key=key)


def lookup_chain(bundle: LanguageBundle, mode: Mode) -> tuple[Mapping[str, str], ...]:
    """Return the mappings consulted for ``mode``, most specific first."""

    if mode is Mode.FULL:
        return (bundle.full, bundle.summary)
    return (bundle.summary,)


def first_hit(chain: Sequence[Mapping[str, str]], key: str) -> str | None:
    for messages in chain:
        text = messages.get(key)
        if text:
            return text
    return None


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving display text in the active mode."""

    bundle: LanguageBundle
    mode: Mode = Mode.SUMMARY

    def __call__(self, key: str) -> str:
        text = first_hit(lookup_chain(self.bundle, self.mode), key)
        return text if text is not None else missing_key_marker(key)

    def has(self, key: str) -> bool:
        return first_hit(lookup_chain(self.bundle, self.mode), key) is not None


def resolve(bundle: LanguageBundle, mode: Mode, key: str) -> str:
    """Resolve ``key`` against ``bundle`` without constructing a translator."""

    return Translator(bundle=bundle, mode=mode)(key)


__all__ = [
    "MISSING_KEY_TEMPLATE",
    "Translator",
    "first_hit",
    "lookup_chain",
    "missing_key_marker",
    "resolve",
]
