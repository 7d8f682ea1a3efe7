from __future__ import annotations

from typing import Optional

from mkpasswd.core.dictionary import DICTIONARY_SIZE, WORDS, WORDS_PER_PHRASE
from mkpasswd.core.models import PassphraseRequest, PassphraseResult
from mkpasswd.core.random_source import RandomSource, default_source
from mkpasswd.core.selector import draw_index


def generate_passphrase(
    request: PassphraseRequest,
    source: Optional[RandomSource] = None,
) -> PassphraseResult:
    """Draw WORDS_PER_PHRASE independent words; repeats are allowed."""
    if source is None:
        source = default_source(request.device or None)

    words: list[str] = []
    with source:
        for _ in range(WORDS_PER_PHRASE):
            words.append(WORDS[draw_index(source, DICTIONARY_SIZE)])

    return PassphraseResult(words=tuple(words), delimiter=request.delimiter)
