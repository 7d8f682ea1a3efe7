from __future__ import annotations

import sys
import unittest
from collections import Counter

from mkpasswd.core.random_source import RandomSource
from mkpasswd.core.selector import (
    DRAW_SPACE,
    draw_index,
    is_power_of_two,
    passphrase_entropy_bits,
    reduction_counts,
    rejection_limit,
    select,
)


class _ScriptedSource(RandomSource):
    def __init__(self, draws: list[int]) -> None:
        self._draws = list(draws)
        self.consumed = 0

    def read_bytes(self, n: int) -> bytes:
        self.consumed += 1
        return self._draws.pop(0).to_bytes(n, sys.byteorder)


class SelectorTests(unittest.TestCase):
    def test_select_is_modulo_reduction(self) -> None:
        self.assertEqual(select(711, 2048), 711)
        self.assertEqual(select(711 + 2048 * 12345, 2048), 711)
        self.assertEqual(select(DRAW_SPACE - 1, 2048), 2047)
        self.assertEqual(select(0, 2048), 0)

    def test_select_rejects_empty_dictionary(self) -> None:
        with self.assertRaisesRegex(ValueError, "> 0"):
            select(5, 0)

    def test_select_rejects_out_of_range_draws(self) -> None:
        with self.assertRaises(ValueError):
            select(-1, 2048)
        with self.assertRaises(ValueError):
            select(DRAW_SPACE, 2048)

    def test_every_32_bit_input_hits_each_index_equally(self) -> None:
        counts = reduction_counts(2048)
        self.assertEqual(len(counts), 2048)
        self.assertEqual(set(counts), {2**32 // 2048})
        self.assertEqual(sum(counts), 2**32)

    def test_reduction_counts_match_exhaustive_enumeration(self) -> None:
        observed = Counter(value % 2048 for value in range(1 << 16))
        self.assertEqual(reduction_counts(2048, width_bits=16), [observed[i] for i in range(2048)])

        observed = Counter(value % 3 for value in range(1 << 8))
        self.assertEqual(reduction_counts(3, width_bits=8), [observed[i] for i in range(3)])

    def test_non_power_of_two_size_shows_modulo_bias(self) -> None:
        counts = reduction_counts(3)
        self.assertNotEqual(min(counts), max(counts))

    def test_is_power_of_two(self) -> None:
        self.assertTrue(is_power_of_two(1))
        self.assertTrue(is_power_of_two(2048))
        self.assertFalse(is_power_of_two(0))
        self.assertFalse(is_power_of_two(2047))
        self.assertFalse(is_power_of_two(-2048))

    def test_draw_index_uses_one_draw_for_power_of_two(self) -> None:
        source = _ScriptedSource([333 + 2048 * 7])
        self.assertEqual(draw_index(source, 2048), 333)
        self.assertEqual(source.consumed, 1)

    def test_draw_index_rejects_draws_above_limit_for_other_sizes(self) -> None:
        limit = rejection_limit(3)
        self.assertEqual(limit % 3, 0)
        source = _ScriptedSource([limit, DRAW_SPACE - 1, 7])
        self.assertEqual(draw_index(source, 3), 1)
        self.assertEqual(source.consumed, 3)

    def test_rejection_limit_for_power_of_two_is_full_space(self) -> None:
        self.assertEqual(rejection_limit(2048), DRAW_SPACE)

    def test_entropy_of_six_words_is_66_bits(self) -> None:
        self.assertEqual(passphrase_entropy_bits(6, 2048), 66.0)

    def test_entropy_rejects_bad_inputs(self) -> None:
        with self.assertRaises(ValueError):
            passphrase_entropy_bits(0, 2048)
        with self.assertRaises(ValueError):
            passphrase_entropy_bits(6, 0)


if __name__ == "__main__":
    unittest.main()
