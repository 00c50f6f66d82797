"""Exception types raised by `pyimgraw`.

Every failure here is a caller error: arguments are validated up front and
nothing is retried, truncated or padded.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """An argument violates a precondition (size, sign, layout)."""

    def __init__(self, param_name: str, message: str) -> None:
        self.param_name = str(param_name)
        super().__init__(f"{self.param_name}: {message}")


class UnknownPixelFormatError(KeyError):
    """A pixel format name is not present in the registry."""

    def __str__(self) -> str:
        # KeyError quotes its argument by default.
        return str(self.args[0]) if self.args else ""


class ImageDisposedError(RuntimeError):
    """The image (or frame) has been closed and its storage released."""
