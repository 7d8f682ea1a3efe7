"""Core dictionary, random source, selection and formatting for mkpasswd."""

from __future__ import annotations


def generate_passphrase(request, source=None):
    from mkpasswd.core.passphrase_service import generate_passphrase as _generate_passphrase

    return _generate_passphrase(request, source)


__all__ = ["generate_passphrase"]
