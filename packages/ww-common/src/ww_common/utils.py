"""
Shared utility functions for Whisperwire.

Contains general-purpose text helpers used by the detectors and the
transcript buffer.
"""

from __future__ import annotations


def lower_preserving_offsets(text: str) -> str:
    """Lower-case *text* without changing any character offset.

    ``str.lower`` may expand some characters (e.g. ``"İ"``), which would
    shift every later offset. Such characters are left unchanged so that
    indices into the result are valid indices into *text*.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(ch if len(low := ch.lower()) != 1 else low for ch in text)


def clip_excerpt(text: str, start: int, end: int, context_chars: int) -> str:
    """Return ``text[start:end + context_chars]`` clipped to *text*, trimmed.

    Args:
        text: Source text.
        start: Excerpt start offset.
        end: End offset of the matched span.
        context_chars: Trailing characters of context to keep after *end*.
    """
    stop = min(end + context_chars, len(text))
    return text[start:stop].strip()
