#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from mkpasswd.core.error_dialect import MkpasswdError, exit_status_for, format_error_text
from mkpasswd.core.formatter import DelimiterMode, render_line
from mkpasswd.core.models import PassphraseRequest
from mkpasswd.core.passphrase_service import generate_passphrase


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mkpasswd",
        description="Six-word passphrase generator (66 bits of entropy from the OS random source).",
        epilog="With both -d and -s, the last one given wins.",
        add_help=False,
    )
    # -d and -s share a destination so the last flag parsed wins.
    parser.add_argument(
        "-d",
        dest="delimiter",
        action="store_const",
        const=DelimiterMode.DASH,
        default=DelimiterMode.NONE,
        help="delimit words with dashes",
    )
    parser.add_argument(
        "-s",
        dest="delimiter",
        action="store_const",
        const=DelimiterMode.SPACE,
        help="delimit words with spaces",
    )
    parser.add_argument("-h", dest="help", action="store_true", help="print this message")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None, *, device: str | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help(file=sys.stderr)
        return 0

    request = PassphraseRequest(delimiter=args.delimiter, device=device or "")
    try:
        result = generate_passphrase(request)
    except MkpasswdError as exc:
        print(f"mkpasswd: {format_error_text(exc)}", file=sys.stderr)
        return exit_status_for(exc)
    sys.stdout.write(render_line(result.words, result.delimiter))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
