from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mkpasswd.core.dictionary import DICTIONARY_SIZE
from mkpasswd.core.formatter import DelimiterMode, format_passphrase
from mkpasswd.core.selector import passphrase_entropy_bits


@dataclass(frozen=True)
class PassphraseRequest:
    delimiter: DelimiterMode = DelimiterMode.NONE
    # Empty selects the platform default source.
    device: str = ""


@dataclass(frozen=True)
class PassphraseResult:
    words: Tuple[str, ...]
    delimiter: DelimiterMode = DelimiterMode.NONE

    @property
    def estimated_entropy_bits(self) -> float:
        return passphrase_entropy_bits(len(self.words), DICTIONARY_SIZE)

    def as_line(self) -> str:
        return format_passphrase(self.words, self.delimiter)
