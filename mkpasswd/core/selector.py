from __future__ import annotations

import math

from mkpasswd.core.random_source import DRAW_BITS, RandomSource

DRAW_SPACE = 1 << DRAW_BITS


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def select(draw: int, dictionary_size: int) -> int:
    if dictionary_size <= 0:
        raise ValueError("dictionary size must be > 0")
    if not 0 <= draw < DRAW_SPACE:
        raise ValueError(f"draw must be an unsigned {DRAW_BITS}-bit value")
    return draw % dictionary_size


def rejection_limit(dictionary_size: int) -> int:
    """Largest multiple of `dictionary_size` that fits in the draw space."""
    if dictionary_size <= 0:
        raise ValueError("dictionary size must be > 0")
    return DRAW_SPACE - (DRAW_SPACE % dictionary_size)


def draw_index(source: RandomSource, dictionary_size: int) -> int:
    if is_power_of_two(dictionary_size):
        # 2**32 is an exact multiple of every power of two up to 2**32.
        return select(source.draw_u32(), dictionary_size)

    limit = rejection_limit(dictionary_size)
    while True:
        draw = source.draw_u32()
        if draw < limit:
            return select(draw, dictionary_size)


def reduction_counts(dictionary_size: int, width_bits: int = DRAW_BITS) -> list[int]:
    """Exact hits per index when every `width_bits` input is reduced modulo the size."""
    if dictionary_size <= 0:
        raise ValueError("dictionary size must be > 0")
    if width_bits <= 0:
        raise ValueError("width must be > 0")
    full, remainder = divmod(1 << width_bits, dictionary_size)
    return [full + 1 if idx < remainder else full for idx in range(dictionary_size)]


def passphrase_entropy_bits(words: int, dictionary_size: int) -> float:
    if words <= 0:
        raise ValueError("words must be > 0")
    if dictionary_size <= 0:
        raise ValueError("dictionary size must be > 0")
    return words * math.log2(dictionary_size)
