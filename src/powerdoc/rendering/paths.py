"""Source-file bookkeeping for pretty-printed listings."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass
class SourceFile:
    """A documented source file: where it lives and how it is displayed."""

    resolved: str
    shortened: str | None = None


def common_prefix(paths: Sequence[str]) -> str:
    """Longest common directory of ``paths``, with a trailing separator.

    A single path yields its directory (or itself when it has no extension).
    Returns an empty string when the paths share nothing.
    """
    if not paths:
        return ""

    resolved = [os.path.abspath(p) for p in paths]

    if len(resolved) == 1:
        prefix = resolved[0]
        if os.path.splitext(prefix)[1]:
            prefix = os.path.dirname(prefix)
        return prefix.rstrip(os.sep) + os.sep

    split = [p.split(os.sep) for p in resolved]
    # The last segment of each path is a filename, never part of the prefix
    dirs = [segments[:-1] for segments in split]

    common: list[str] = []
    for segments in zip(*dirs):
        if any(segment != segments[0] for segment in segments):
            break
        common.append(segments[0])

    if not common:
        return ""

    prefix = os.sep.join(common)
    return prefix.rstrip(os.sep) + os.sep
