"""Language bundle models shared by the loader, resolver and renderer."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

HTML_LANG_KEY = "html-lang"


class Mode(str, Enum):
    """How much content the page shows."""

    SUMMARY = "summary"
    FULL = "full"

    @property
    def opposite(self) -> Mode:
        return Mode.FULL if self is Mode.SUMMARY else Mode.SUMMARY

    @classmethod
    def parse(cls, value: str | Mode) -> Mode:
        """Return the mode named by ``value``; raise ``ValueError`` otherwise."""

        if isinstance(value, Mode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown content mode: {value!r}") from None


class BundleFetchError(Exception):
    """Raised by bundle sources when a language bundle cannot be obtained."""

    def __init__(self, language: str, reason: str) -> None:
        super().__init__(f"Unable to load bundle for {language!r}: {reason}")
        self.language = language
        self.reason = reason


class LanguageBundle(BaseModel):
    """Translated strings for one language, split by content mode."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    summary: Mapping[str, str] = Field(default_factory=dict)
    full: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("summary", "full", mode="before")
    @classmethod
    def _coerce_section(cls, value: Any) -> Mapping[str, str]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("Bundle sections must be JSON objects")
        return {str(key): "" if item is None else str(item) for key, item in value.items()}

    @classmethod
    def from_payload(cls, language: str, payload: Any) -> LanguageBundle:
        """Validate a decoded JSON payload, raising :class:`BundleFetchError`."""

        if not isinstance(payload, Mapping):
            raise BundleFetchError(language, "bundle payload must be a JSON object")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as error:
            raise BundleFetchError(language, f"invalid bundle: {error}") from error

    @classmethod
    def empty(cls) -> LanguageBundle:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.summary and not self.full

    def section(self, mode: Mode) -> Mapping[str, str]:
        return self.full if mode is Mode.FULL else self.summary

    @property
    def html_lang(self) -> str | None:
        return self.summary.get(HTML_LANG_KEY) or None

    def as_dict(self) -> dict[str, dict[str, str]]:
        """Return a JSON-ready copy of the bundle."""

        return {"summary": dict(self.summary), "full": dict(self.full)}


__all__ = ["BundleFetchError", "HTML_LANG_KEY", "LanguageBundle", "Mode"]
