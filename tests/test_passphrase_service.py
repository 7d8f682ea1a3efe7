from __future__ import annotations

import sys
import unittest
from unittest.mock import patch

from mkpasswd.core import generate_passphrase as lazy_generate_passphrase
from mkpasswd.core.dictionary import WORDS
from mkpasswd.core.error_dialect import ReadError
from mkpasswd.core.formatter import DelimiterMode
from mkpasswd.core.models import PassphraseRequest, PassphraseResult
from mkpasswd.core.passphrase_service import generate_passphrase

# Geld, Are, Alto, City, Bang, Fee; high bits set to exercise the reduction.
SCRIPTED_DRAWS = [711 + 2048 * 3, 74, 45 + 2048 * 900, 333, 129 + 2048 * 2_000_000, 589]


class _ScriptedSource:
    def __init__(self, draws: list[int], fail_after: int | None = None) -> None:
        self._draws = list(draws)
        self._fail_after = fail_after
        self.draws_taken = 0
        self.opened = 0
        self.closed = 0

    def __enter__(self) -> "_ScriptedSource":
        self.opened += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.closed += 1

    def draw_u32(self) -> int:
        if self._fail_after is not None and self.draws_taken >= self._fail_after:
            raise ReadError("short read from fake device: wanted 4 byte(s), got 0")
        self.draws_taken += 1
        return self._draws.pop(0)


class PassphraseServiceTests(unittest.TestCase):
    def test_scripted_draws_select_expected_words(self) -> None:
        result = generate_passphrase(PassphraseRequest(), source=_ScriptedSource(SCRIPTED_DRAWS))
        self.assertEqual(result.words, ("Geld", "Are", "Alto", "City", "Bang", "Fee"))
        self.assertEqual(result.as_line(), "GeldAreAltoCityBangFee")

    def test_delimiter_is_carried_to_result(self) -> None:
        result = generate_passphrase(
            PassphraseRequest(delimiter=DelimiterMode.DASH),
            source=_ScriptedSource(SCRIPTED_DRAWS),
        )
        self.assertEqual(result.as_line(), "Geld-Are-Alto-City-Bang-Fee")

    def test_each_word_consumes_one_fresh_draw(self) -> None:
        source = _ScriptedSource(SCRIPTED_DRAWS)
        generate_passphrase(PassphraseRequest(), source=source)
        self.assertEqual(source.draws_taken, 6)
        self.assertEqual(source.opened, 1)
        self.assertEqual(source.closed, 1)

    def test_repeated_words_are_not_filtered(self) -> None:
        result = generate_passphrase(PassphraseRequest(), source=_ScriptedSource([0] * 6))
        self.assertEqual(result.words, ("Abe",) * 6)

    def test_read_failure_propagates_and_releases_source(self) -> None:
        source = _ScriptedSource(SCRIPTED_DRAWS, fail_after=2)
        with self.assertRaises(ReadError):
            generate_passphrase(PassphraseRequest(), source=source)
        self.assertEqual(source.closed, 1)

    def test_request_device_selects_source(self) -> None:
        fake = _ScriptedSource(SCRIPTED_DRAWS)
        with patch("mkpasswd.core.passphrase_service.default_source", return_value=fake) as mocked:
            generate_passphrase(PassphraseRequest(device="/dev/fake"))
        mocked.assert_called_once_with("/dev/fake")

    def test_empty_device_selects_platform_default(self) -> None:
        fake = _ScriptedSource(SCRIPTED_DRAWS)
        with patch("mkpasswd.core.passphrase_service.default_source", return_value=fake) as mocked:
            generate_passphrase(PassphraseRequest())
        mocked.assert_called_once_with(None)

    def test_real_source_produces_six_dictionary_words(self) -> None:
        result = generate_passphrase(PassphraseRequest(delimiter=DelimiterMode.SPACE))
        self.assertEqual(len(result.words), 6)
        for word in result.words:
            self.assertIn(word, WORDS)
        self.assertEqual(result.as_line().split(" "), list(result.words))

    def test_estimated_entropy_bits(self) -> None:
        result = PassphraseResult(words=("Geld", "Are", "Alto", "City", "Bang", "Fee"))
        self.assertEqual(result.estimated_entropy_bits, 66.0)

    def test_lazy_core_export(self) -> None:
        result = lazy_generate_passphrase(PassphraseRequest(), _ScriptedSource(SCRIPTED_DRAWS))
        self.assertEqual(result.words[0], "Geld")


if __name__ == "__main__":
    unittest.main()
