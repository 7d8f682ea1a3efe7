from __future__ import annotations

import enum
from typing import Sequence


class DelimiterMode(enum.Enum):
    NONE = ""
    DASH = "-"
    SPACE = " "

    @property
    def separator(self) -> str:
        return self.value


def format_passphrase(words: Sequence[str], mode: DelimiterMode = DelimiterMode.NONE) -> str:
    if not words:
        raise ValueError("passphrase needs at least one word")
    if any(not word for word in words):
        raise ValueError("passphrase words must be non-empty")
    return mode.separator.join(words)


def render_line(words: Sequence[str], mode: DelimiterMode = DelimiterMode.NONE) -> str:
    """The exact text written to standard output: one line, newline-terminated."""
    return format_passphrase(words, mode) + "\n"
