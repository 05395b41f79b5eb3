"""Error codes and error handling utilities for icon loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

from PIL import UnidentifiedImageError


class IconErrorCode(Enum):
    """Reasons an icon could not be produced."""

    NOT_FOUND = auto()
    DECODE_FAILURE = auto()
    RASTERIZE_FAILURE = auto()
    IO_FAILURE = auto()
    UNSUPPORTED_FORMAT = auto()


ERROR_MESSAGES: dict[IconErrorCode, str] = {
    IconErrorCode.NOT_FOUND: "No icon with this name exists in the theme directories.",
    IconErrorCode.DECODE_FAILURE: "The bitmap could not be decoded. It may be corrupt or unsupported.",
    IconErrorCode.RASTERIZE_FAILURE: "The vector image could not be rasterized.",
    IconErrorCode.IO_FAILURE: "The icon file could not be read. It may have been moved or deleted.",
    IconErrorCode.UNSUPPORTED_FORMAT: "The icon file has an unsupported format.",
}


@dataclass
class IconLoadError(Exception):
    """Failure to resolve or render one icon, tagged with its cause."""

    code: IconErrorCode
    name: str = ""
    path: Path | None = None
    cause: BaseException | None = None
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if self.cause is not None and "original" not in self.details:
            self.details["original"] = str(self.cause)

    def __str__(self) -> str:
        parts = [self.message]
        if self.name:
            parts.append(f"\nIcon: {self.name}")
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def __hash__(self) -> int:
        return id(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "name": self.name,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


def classify_exception(
    exc: BaseException,
    *,
    name: str = "",
    path: Path | None = None,
) -> IconLoadError:
    """Map a library exception raised while decoding a bitmap to an IconLoadError."""
    if isinstance(exc, IconLoadError):
        return exc
    # UnidentifiedImageError subclasses OSError, so it must be checked first.
    if isinstance(exc, UnidentifiedImageError):
        return IconLoadError(IconErrorCode.DECODE_FAILURE, name=name, path=path, cause=exc)
    if isinstance(exc, OSError):
        # Pillow reports truncated or broken image data as a bare OSError.
        if isinstance(exc, (FileNotFoundError, PermissionError, IsADirectoryError)):
            return IconLoadError(IconErrorCode.IO_FAILURE, name=name, path=path, cause=exc)
        if exc.errno is None:
            return IconLoadError(IconErrorCode.DECODE_FAILURE, name=name, path=path, cause=exc)
        return IconLoadError(IconErrorCode.IO_FAILURE, name=name, path=path, cause=exc)
    if isinstance(exc, (ValueError, SyntaxError, EOFError)):
        return IconLoadError(IconErrorCode.DECODE_FAILURE, name=name, path=path, cause=exc)
    return IconLoadError(
        IconErrorCode.DECODE_FAILURE,
        message=f"{type(exc).__name__}: {exc}",
        name=name,
        path=path,
        cause=exc,
    )


def format_error_for_user(error: IconLoadError | Exception) -> str:
    """Format an error as a short single-paragraph message."""
    if isinstance(error, IconLoadError):
        parts = [error.message]
        if error.name:
            parts.append(f" ({error.name})")
        if error.path:
            parts.append(f"\n\nFile: {error.path.name}")
        return "".join(parts)
    return format_error_for_user(classify_exception(error))
