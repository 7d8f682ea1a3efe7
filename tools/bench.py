from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Allow running as `python tools/bench.py` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mkpasswd.core.error_dialect import MkpasswdError, format_error_text
from mkpasswd.core.models import PassphraseRequest
from mkpasswd.core.passphrase_service import generate_passphrase


def _bench_passphrases(count: int, device: str) -> float:
    req = PassphraseRequest(device=device)
    t0 = time.perf_counter()
    for _ in range(count):
        generate_passphrase(req)
    dt = time.perf_counter() - t0
    rate = (count / dt) if dt > 0 else 0.0
    print(f"[bench] passphrases={count} device={device or 'default'} seconds={dt:.4f} rate={rate:.1f}/s")
    return rate


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="mkpasswd baseline benchmark (stdlib-only).")
    parser.add_argument("--passphrases", type=int, default=1000, help="Number of passphrases to generate.")
    parser.add_argument("--device", default="", help="Random device path (default: platform source).")
    args = parser.parse_args(argv)

    if args.passphrases <= 0:
        parser.error("Set --passphrases to a value > 0")

    try:
        _bench_passphrases(count=args.passphrases, device=args.device)
    except MkpasswdError as exc:
        print(f"[bench] {format_error_text(exc)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
