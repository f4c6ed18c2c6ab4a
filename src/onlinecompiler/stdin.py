"""Heuristic that decides whether a program needs standard input.

Each language is associated with the tokens its standard library uses for
interactive reads.  A program "needs stdin" when its source contains any of
them.  This is a plain substring check, not a parser: a token inside a
comment or string literal still counts, and an input call spelled some other
way is missed.  Either mistake only shows or hides the stdin field; the
submission itself is unaffected.
"""

from __future__ import annotations

from typing import Mapping, Tuple


INPUT_TOKENS: Mapping[str, Tuple[str, ...]] = {
    "71": ("input(",),  # Python
    "54": ("cin >>",),  # C++
    "62": ("Scanner",),  # Java
    "50": ("scanf(",),  # C
    "63": ("prompt(",),  # JavaScript
    "73": ("read_line",),  # Rust
    "72": ("gets",),  # Ruby
    "60": ("Scanln",),  # Go
    "68": ("fgets", "readline"),  # PHP
}


def requires_stdin(service_id: str, source_text: str) -> bool:
    """Return ``True`` if ``source_text`` looks like it reads standard input.

    Languages without an entry in :data:`INPUT_TOKENS` never require input.
    """
    tokens = INPUT_TOKENS.get(service_id)
    if not tokens:
        return False
    return any(token in source_text for token in tokens)
