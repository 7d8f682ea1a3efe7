#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mkpasswd.core.dictionary import DICTIONARY_SIZE
from mkpasswd.core.error_dialect import MkpasswdError, format_error_text
from mkpasswd.core.random_source import DRAW_BITS, RandomSource, default_source
from mkpasswd.core.selector import select


def _estimated_collision_upper_bound(samples: int) -> int:
    # Birthday-bound estimate for expected collisions with a conservative safety margin.
    space_size = 1 << DRAW_BITS
    expected = (samples * (samples - 1)) / (2.0 * space_size)
    return max(2, int(math.ceil(expected * 20.0 + 5.0)))


def _expected_distinct_indexes(samples: int) -> float:
    # Occupancy of DICTIONARY_SIZE equally likely buckets after `samples` draws.
    return DICTIONARY_SIZE * (1.0 - (1.0 - 1.0 / DICTIONARY_SIZE) ** samples)


def _run_probe(
    source: RandomSource,
    *,
    samples: int,
    min_unique_ratio: float,
    min_ones_ratio: float,
    max_ones_ratio: float,
    min_coverage_ratio: float,
) -> tuple[float, float, int, int, float]:
    if samples <= 0:
        raise ValueError("samples must be > 0")
    if not (0.0 < min_unique_ratio <= 1.0):
        raise ValueError("min-unique-ratio must be within (0, 1]")
    if not (0.0 <= min_ones_ratio <= 1.0 and 0.0 <= max_ones_ratio <= 1.0 and min_ones_ratio < max_ones_ratio):
        raise ValueError("ones-ratio bounds must satisfy 0 <= min < max <= 1")
    if not (0.0 <= min_coverage_ratio <= 1.0):
        raise ValueError("min-coverage-ratio must be within [0, 1]")

    unique_draws: set[int] = set()
    indexes: set[int] = set()
    total_one_bits = 0
    total_bits = samples * DRAW_BITS

    with source:
        for _ in range(samples):
            draw = source.draw_u32()
            unique_draws.add(draw)
            indexes.add(select(draw, DICTIONARY_SIZE))
            total_one_bits += bin(draw).count("1")

    unique_count = len(unique_draws)
    collision_count = samples - unique_count
    unique_ratio = unique_count / samples
    ones_ratio = total_one_bits / total_bits
    coverage_ratio = len(indexes) / _expected_distinct_indexes(samples)

    if unique_ratio < min_unique_ratio:
        raise RuntimeError(
            f"RNG health probe failed: unique ratio {unique_ratio:.6f} below threshold {min_unique_ratio:.6f}"
        )
    if ones_ratio < min_ones_ratio or ones_ratio > max_ones_ratio:
        raise RuntimeError(
            f"RNG health probe failed: one-bit ratio {ones_ratio:.6f} outside [{min_ones_ratio:.6f}, {max_ones_ratio:.6f}]"
        )
    if coverage_ratio < min_coverage_ratio:
        raise RuntimeError(
            f"RNG health probe failed: dictionary coverage {coverage_ratio:.6f} below threshold {min_coverage_ratio:.6f}"
        )

    collision_upper_bound = _estimated_collision_upper_bound(samples)
    if collision_count > collision_upper_bound:
        raise RuntimeError(
            "RNG health probe failed: observed collisions exceed conservative birthday bound "
            f"({collision_count} > {collision_upper_bound})"
        )

    return unique_ratio, ones_ratio, collision_count, collision_upper_bound, coverage_ratio


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Local RNG health probe for the mkpasswd random source. "
            "This is a sanity check, not a cryptographic certification."
        )
    )
    parser.add_argument("--samples", type=int, default=8192, help="Number of 32-bit draws to sample (default: 8192).")
    parser.add_argument("--device", default=None, help="Random device path (default: platform source).")
    parser.add_argument(
        "--min-unique-ratio",
        type=float,
        default=0.99,
        help="Minimum required unique draw ratio (default: 0.99).",
    )
    parser.add_argument(
        "--min-ones-ratio",
        type=float,
        default=0.47,
        help="Minimum one-bit ratio bound (default: 0.47).",
    )
    parser.add_argument(
        "--max-ones-ratio",
        type=float,
        default=0.53,
        help="Maximum one-bit ratio bound (default: 0.53).",
    )
    parser.add_argument(
        "--min-coverage-ratio",
        type=float,
        default=0.9,
        help="Minimum distinct dictionary indexes hit, relative to the uniform expectation (default: 0.9).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    source = default_source(args.device)
    try:
        unique_ratio, ones_ratio, collisions, collision_bound, coverage = _run_probe(
            source,
            samples=args.samples,
            min_unique_ratio=args.min_unique_ratio,
            min_ones_ratio=args.min_ones_ratio,
            max_ones_ratio=args.max_ones_ratio,
            min_coverage_ratio=args.min_coverage_ratio,
        )
    except MkpasswdError as exc:
        print(f"[rng] probe failed: {format_error_text(exc)}", file=sys.stderr)
        return 1
    except (RuntimeError, ValueError) as exc:
        print(f"[rng] probe failed: {exc}", file=sys.stderr)
        return 1

    print(f"[rng] source={source.name} samples={args.samples}")
    print(f"[rng] unique_ratio={unique_ratio:.6f}")
    print(f"[rng] one_bit_ratio={ones_ratio:.6f}")
    print(f"[rng] collisions={collisions} (bound={collision_bound})")
    print(f"[rng] coverage={coverage:.6f}")
    print("[rng] probe ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
