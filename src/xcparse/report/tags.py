"""Tag extraction from test names and activity titles.

Recognized forms, tried in this order over the whole text:

    @smoke   #regression   [slow]   tag:flaky

A tag word is letters and digits with single inner underscores
(``@smoke_test``); a trailing underscore separates, so ``test_@smoke_#regression``
yields ``smoke`` and ``regression``. Every match of every pattern yields one
tag, so the same word can be returned more than once.
"""

from __future__ import annotations

import re

import structlog

log = structlog.get_logger(__name__)

_WORD = r"[^\W_]+(?:_[^\W_]+)*"

TAG_PATTERNS: tuple[str, ...] = (
    rf"@({_WORD})",
    rf"#({_WORD})",
    rf"\[({_WORD})\]",
    rf"tag:({_WORD})",
)


def _compile(patterns: tuple[str, ...]) -> list[re.Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            log.debug("tag_pattern_skipped", pattern=pattern, error=str(e))
            continue
        if regex.groups < 1:
            log.debug("tag_pattern_skipped", pattern=pattern, error="no capture group")
            continue
        compiled.append(regex)
    return compiled


_COMPILED = _compile(TAG_PATTERNS)


def extract_tags(text: str, patterns: tuple[str, ...] | None = None) -> list[str]:
    """Extract tags from free text.

    Args:
        text: Test name or activity title.
        patterns: Override the default pattern list. Each pattern's first
            group is the tag. Patterns that fail to compile or have no
            group are skipped.

    Returns:
        Tags in pattern order, then left-to-right within each pattern.
    """
    compiled = _COMPILED if patterns is None else _compile(patterns)
    return [match.group(1) for regex in compiled for match in regex.finditer(text)]
