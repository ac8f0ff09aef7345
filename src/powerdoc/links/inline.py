"""Inline ``{@tag text}`` replacement."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class InlineTag:
    """One inline tag found in a string."""

    complete_tag: str  # e.g. "{@link Foo#bar|the bar method}"
    tag: str  # e.g. "link"
    text: str  # e.g. "Foo#bar|the bar method"


# A replacer receives the whole string and returns it with the tag replaced
InlineReplacer = Callable[[str, InlineTag], str]


def _tag_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(r"\{@" + re.escape(tag) + r"\s+((?:.|\n)+?)\}", re.IGNORECASE)


def replace_inline_tags(string: str | None, replacers: Mapping[str, InlineReplacer]) -> str:
    """Run each replacer over every occurrence of its inline tag.

    Tags are processed one tag name at a time, left to right. Scanning stops
    for a tag name as soon as a replacer leaves the string unchanged.

    Args:
        string: Text containing inline tags
        replacers: Tag name -> replacer

    Returns:
        The rewritten string, stripped of surrounding whitespace
    """
    result = string or ""

    for tag, replacer in replacers.items():
        pattern = _tag_pattern(tag)
        pos = 0

        while True:
            match = pattern.search(result, pos)
            if match is None:
                break

            previous = result
            result = replacer(
                result,
                InlineTag(complete_tag=match.group(0), tag=tag, text=match.group(1)),
            )
            if result == previous:
                break

            # Continue after the replacement, whatever its length
            pos = max(0, match.end() + len(result) - len(previous))

    return result.strip()
