"""Inline markup conversion for translated strings."""

from __future__ import annotations

import re

# Non-greedy, single pass; nested or escaped delimiters are not supported.
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def render_markup(text: str | None) -> str:
    """Convert ``**bold**`` spans into ``<strong>`` elements."""

    if not text:
        return ""
    return BOLD_PATTERN.sub(r"<strong>\1</strong>", text)


__all__ = ["BOLD_PATTERN", "render_markup"]
