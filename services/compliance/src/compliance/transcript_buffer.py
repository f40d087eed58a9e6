"""
Append-only call transcript buffer for Whisperwire.

Accumulates utterances for one call and renders them as a single
``"<speaker>: <text>"`` line per utterance, recording for every segment the
character range its text occupies in the rendered transcript.
"""

from __future__ import annotations

from collections.abc import Sequence

from ww_common.models import Speaker, TranscriptSegment

LINE_SEPARATOR = "\n"


def _line_prefix(speaker: Speaker) -> str:
    return f"{speaker.value}: "


def render_transcript(segments: Sequence[TranscriptSegment]) -> str:
    """Render *segments* exactly as :class:`TranscriptBuffer` does."""
    return LINE_SEPARATOR.join(f"{_line_prefix(s.speaker)}{s.text}" for s in segments)


class TranscriptBuffer:
    """Per-call, append-only transcript.

    Segments are never mutated or removed once appended.
    """

    def __init__(self) -> None:
        self._segments: list[TranscriptSegment] = []
        self._text: str = ""

    # ── public API ──

    def append(self, speaker: Speaker, text: str, timestamp_ms: int = 0) -> TranscriptSegment:
        """Append one utterance and return its segment.

        Args:
            speaker: Speaker role.
            text: Literal utterance text.
            timestamp_ms: Offset in ms from call start.

        Raises:
            ValueError: If *text* is blank.
        """
        if not text.strip():
            raise ValueError("segment text must not be blank")

        prefix = (LINE_SEPARATOR if self._segments else "") + _line_prefix(speaker)
        start_char = len(self._text) + len(prefix)
        segment = TranscriptSegment(
            speaker=speaker,
            text=text,
            timestamp_ms=timestamp_ms,
            start_char=start_char,
            end_char=start_char + len(text),
        )
        self._segments.append(segment)
        self._text += prefix + text
        return segment

    def get_text(self) -> str:
        """Return the full rendered transcript."""
        return self._text

    @property
    def segments(self) -> tuple[TranscriptSegment, ...]:
        return tuple(self._segments)

    @property
    def segment_count(self) -> int:
        """Number of utterances appended so far."""
        return len(self._segments)
