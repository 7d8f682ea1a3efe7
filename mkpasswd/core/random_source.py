r"""
random_source.py - OS secure random source adapter

Every word consumes one fresh 32-bit draw; nothing is cached or buffered
between draws and there is no fallback to a non-cryptographic generator.

Device choice is fixed per platform when this module is imported:
  - Linux: /dev/urandom. The classic Linux /dev/random blocks whenever the
    kernel's entropy estimate runs low. Using the non-blocking device trades
    that estimate for availability.
  - Windows: no random device; os.urandom reads the system CSPRNG API.
  - FreeBSD, macOS and other BSDs: /dev/random, a Yarrow/Fortuna-class
    generator (256-bit state, hardware RNG input when present) that only
    blocks until it is first seeded.
"""
from __future__ import annotations

import os
import sys
from typing import BinaryIO, Optional

from mkpasswd.core.error_dialect import ReadError, SourceUnavailable

DRAW_BYTES = 4
DRAW_BITS = DRAW_BYTES * 8

if sys.platform.startswith("linux"):
    DEFAULT_DEVICE = "/dev/urandom"
elif os.name == "nt":
    DEFAULT_DEVICE = ""
else:
    DEFAULT_DEVICE = "/dev/random"


class RandomSource:
    """One-capability interface: produce N secure random bytes."""

    name = "random source"

    def open(self) -> "RandomSource":
        return self

    def close(self) -> None:
        pass

    def read_bytes(self, n: int) -> bytes:
        raise NotImplementedError

    def draw_u32(self) -> int:
        return int.from_bytes(self.read_bytes(DRAW_BYTES), sys.byteorder, signed=False)

    def __enter__(self) -> "RandomSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DeviceRandomSource(RandomSource):
    def __init__(self, path: str) -> None:
        self.path = path
        self.name = path
        self._handle: Optional[BinaryIO] = None

    def open(self) -> "DeviceRandomSource":
        if self._handle is not None:
            return self
        try:
            self._handle = open(self.path, "rb", buffering=0)
        except OSError as exc:
            raise SourceUnavailable(
                f"unable to open {self.path}: {exc.strerror or exc}",
                errno=exc.errno,
            ) from exc
        return self

    def close(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()

    def read_bytes(self, n: int) -> bytes:
        if self._handle is None:
            raise ReadError(f"{self.path} is not open")
        try:
            data = self._handle.read(n)
        except OSError as exc:
            raise ReadError(f"read from {self.path} failed: {exc.strerror or exc}", errno=exc.errno) from exc
        if data is None or len(data) != n:
            got = 0 if data is None else len(data)
            raise ReadError(f"short read from {self.path}: wanted {n} byte(s), got {got}")
        return data


class SystemRandomSource(RandomSource):
    name = "os.urandom"

    def read_bytes(self, n: int) -> bytes:
        try:
            data = os.urandom(n)
        except OSError as exc:
            raise ReadError(f"OS CSPRNG failure requesting {n} byte(s): {exc}", errno=exc.errno) from exc
        if len(data) != n:
            raise ReadError(f"OS CSPRNG returned unexpected byte count ({len(data)} != {n})")
        return data


def default_source(device: Optional[str] = None) -> RandomSource:
    """Build the platform source, or a device source for an explicit path."""
    path = DEFAULT_DEVICE if device is None else device
    if not path:
        return SystemRandomSource()
    return DeviceRandomSource(path)
