"""Unit coverage for mode-aware translation lookup."""

from __future__ import annotations

from folio.backend.app.localization import LanguageBundle, Mode, Translator, resolve
from folio.backend.app.localization.resolver import lookup_chain, missing_key_marker

BUNDLE = LanguageBundle.model_validate(
    {
        "summary": {"greeting": "Hi", "title": "Engineer", "blank": ""},
        "full": {"title": "Senior engineer", "detail": "Long form"},
    }
)


def test_active_mode_text_is_returned_verbatim() -> None:
    assert Translator(BUNDLE, Mode.SUMMARY)("title") == "Engineer"
    assert Translator(BUNDLE, Mode.FULL)("title") == "Senior engineer"
    assert Translator(BUNDLE, Mode.FULL)("detail") == "Long form"


def test_full_mode_falls_back_to_summary() -> None:
    assert Translator(BUNDLE, Mode.FULL)("greeting") == "Hi"


def test_summary_mode_never_reads_full_section() -> None:
    assert Translator(BUNDLE, Mode.SUMMARY)("detail") == "!!MISSING_KEY:detail!!"


def test_missing_key_returns_sentinel() -> None:
    translator = Translator(BUNDLE, Mode.FULL)

    assert translator("unknown") == "!!MISSING_KEY:unknown!!"
    assert not translator.has("unknown")


def test_empty_values_count_as_missing() -> None:
    assert Translator(BUNDLE, Mode.SUMMARY)("blank") == missing_key_marker("blank")


def test_example_bundle_resolution() -> None:
    bundle = LanguageBundle.model_validate({"summary": {"a": "Hi"}, "full": {}})

    assert resolve(bundle, Mode.FULL, "a") == "Hi"
    assert resolve(bundle, Mode.FULL, "b") == "!!MISSING_KEY:b!!"


def test_empty_bundle_never_raises() -> None:
    translator = Translator(LanguageBundle.empty(), Mode.FULL)

    assert translator("nav-about") == "!!MISSING_KEY:nav-about!!"


def test_lookup_chain_orders_active_mode_first() -> None:
    chain = lookup_chain(BUNDLE, Mode.FULL)

    assert chain[0]["title"] == "Senior engineer"
    assert chain[1]["title"] == "Engineer"
    assert len(lookup_chain(BUNDLE, Mode.SUMMARY)) == 1
