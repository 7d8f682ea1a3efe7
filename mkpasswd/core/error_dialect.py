from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorDetail:
    code: str
    message: str
    errno: Optional[int] = None


class MkpasswdError(RuntimeError):
    default_code = "internal_error"

    def __init__(self, message: str, *, code: str = "", errno: Optional[int] = None) -> None:
        normalized = _normalize_code(code or self.default_code)
        clean_message = message.strip() or "unspecified error"
        self.code = normalized
        self.message = clean_message
        self.errno = errno
        super().__init__(clean_message)

    def as_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=self.message, errno=self.errno)


class SourceUnavailable(MkpasswdError):
    """The OS secure random primitive could not be opened."""

    default_code = "source_unavailable"


class ReadError(MkpasswdError):
    """A read from the random source failed or came back short."""

    default_code = "read_error"


def _normalize_code(code: str) -> str:
    lowered = code.strip().lower()
    if not lowered:
        return "internal_error"
    out = []
    for ch in lowered:
        if ch.isalnum() or ch == "_":
            out.append(ch)
        elif ch in ("-", " ", "."):
            out.append("_")
    normalized = "".join(out).strip("_")
    return normalized or "internal_error"


def error_detail_from_exception(
    exc: BaseException,
    *,
    default_code: str = "internal_error",
    default_message: str = "unexpected failure",
) -> ErrorDetail:
    if isinstance(exc, MkpasswdError):
        return exc.as_detail()
    message = str(exc).strip() or default_message
    errno = getattr(exc, "errno", None)
    return ErrorDetail(
        code=_normalize_code(default_code),
        message=message,
        errno=errno if isinstance(errno, int) else None,
    )


def format_error_text(
    exc: BaseException,
    *,
    default_code: str = "internal_error",
    default_message: str = "unexpected failure",
) -> str:
    detail = error_detail_from_exception(exc, default_code=default_code, default_message=default_message)
    return f"{detail.code}: {detail.message}"


def exit_status_for(exc: BaseException) -> int:
    """Map a failure onto a process exit status, preferring the OS errno."""
    detail = error_detail_from_exception(exc)
    if detail.errno is not None and 0 < detail.errno < 256:
        return detail.errno
    return 1
