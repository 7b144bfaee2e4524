"""
matcher.py

Responsibility: Marker strings and patterns for conditional tag blocks.

A tag `NAME` wraps a region as `{{{NAME}}} ... {{{/NAME}}}`.
"""

from __future__ import annotations

import re


def tag_markers(tag: str) -> tuple[str, str]:
    """Return the `(open, close)` marker literals for `tag`."""
    return "{{{" + tag + "}}}", "{{{/" + tag + "}}}"


def between_pattern(tag: str) -> re.Pattern[str]:
    """
    Pattern matching an open marker, anything up to the nearest close marker,
    and the close marker itself.

    Non-greedy so that several blocks of the same tag in one file are matched
    one at a time.
    """
    tag_open, tag_close = tag_markers(tag)
    return re.compile(
        re.escape(tag_open) + r"[\s\S]*?" + re.escape(tag_close),
        re.IGNORECASE | re.MULTILINE,
    )
