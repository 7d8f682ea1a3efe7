from __future__ import annotations

import errno
import io
import re
import subprocess
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from mkpasswd.cli.mkpasswd_cli import main, parse_args
from mkpasswd.core.dictionary import WORDS
from mkpasswd.core.formatter import DelimiterMode

ROOT = Path(__file__).resolve().parents[1]
SCRIPTED_DRAWS = [711, 74, 45, 333, 129, 589]
MISSING_DEVICE = "/nonexistent/mkpasswd-test-random-device"


class _ScriptedSource:
    def __init__(self, draws: list[int]) -> None:
        self._draws = list(draws)

    def __enter__(self) -> "_ScriptedSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        pass

    def draw_u32(self) -> int:
        return self._draws.pop(0)


def _run(argv: list[str], **kwargs) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        rc = main(argv, **kwargs)
    return rc, stdout.getvalue(), stderr.getvalue()


def _run_scripted(argv: list[str]) -> tuple[int, str, str]:
    with patch(
        "mkpasswd.core.passphrase_service.default_source",
        return_value=_ScriptedSource(SCRIPTED_DRAWS),
    ):
        return _run(argv)


class CliArgTests(unittest.TestCase):
    def test_default_delimiter_is_none(self) -> None:
        self.assertIs(parse_args([]).delimiter, DelimiterMode.NONE)

    def test_dash_flag(self) -> None:
        self.assertIs(parse_args(["-d"]).delimiter, DelimiterMode.DASH)

    def test_space_flag(self) -> None:
        self.assertIs(parse_args(["-s"]).delimiter, DelimiterMode.SPACE)

    def test_last_delimiter_flag_wins(self) -> None:
        self.assertIs(parse_args(["-d", "-s"]).delimiter, DelimiterMode.SPACE)
        self.assertIs(parse_args(["-s", "-d"]).delimiter, DelimiterMode.DASH)
        self.assertIs(parse_args(["-sd"]).delimiter, DelimiterMode.DASH)

    def test_no_flag_output(self) -> None:
        rc, out, err = _run_scripted([])
        self.assertEqual(rc, 0)
        self.assertEqual(out, "GeldAreAltoCityBangFee\n")
        self.assertEqual(err, "")

    def test_dash_output(self) -> None:
        rc, out, _ = _run_scripted(["-d"])
        self.assertEqual(rc, 0)
        self.assertEqual(out, "Geld-Are-Alto-City-Bang-Fee\n")

    def test_space_output(self) -> None:
        rc, out, _ = _run_scripted(["-s"])
        self.assertEqual(rc, 0)
        self.assertEqual(out, "Geld Are Alto City Bang Fee\n")

    def test_help_goes_to_stderr_and_generates_nothing(self) -> None:
        with patch("mkpasswd.core.passphrase_service.default_source") as mocked:
            rc, out, err = _run(["-h"])
        self.assertEqual(rc, 0)
        self.assertEqual(out, "")
        self.assertIn("usage: mkpasswd", err)
        self.assertIn("delimit words with dashes", err)
        mocked.assert_not_called()

    def test_unknown_flag_is_fatal(self) -> None:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                main(["-x"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("usage: mkpasswd", stderr.getvalue())

    def test_missing_device_fails_with_errno(self) -> None:
        rc, out, err = _run([], device=MISSING_DEVICE)
        self.assertNotEqual(rc, 0)
        self.assertEqual(rc, errno.ENOENT)
        self.assertEqual(out, "")
        self.assertIn("source_unavailable", err)
        self.assertIn(MISSING_DEVICE, err)

    def test_real_source_output_shape(self) -> None:
        for flag, sep in (([], None), (["-d"], "-"), (["-s"], " ")):
            rc, out, _ = _run(flag)
            self.assertEqual(rc, 0)
            self.assertTrue(out.endswith("\n"))
            self.assertEqual(out.count("\n"), 1)
            line = out[:-1]
            words = re.findall(r"[A-Z][a-z]*", line) if sep is None else line.split(sep)
            self.assertEqual(len(words), 6)
            for word in words:
                self.assertIn(word, WORDS)

    def test_runs_vary(self) -> None:
        first_words = set()
        for _ in range(1000):
            rc, out, _ = _run(["-s"])
            self.assertEqual(rc, 0)
            first_words.add(out.split(" ", 1)[0])
        self.assertGreater(len(first_words), 1)

    def test_module_entrypoint_subprocess(self) -> None:
        proc = subprocess.run(
            [sys.executable, "-m", "mkpasswd.cli.mkpasswd_cli", "-d"],
            cwd=str(ROOT),
            check=True,
            capture_output=True,
            text=True,
            timeout=10.0,
        )
        words = proc.stdout.rstrip("\n").split("-")
        self.assertEqual(len(words), 6)
        self.assertTrue(set(words).issubset(set(WORDS)))
        self.assertEqual(proc.stderr, "")


if __name__ == "__main__":
    unittest.main()
