"""Small parameter validation helpers.

These run before any memory is reinterpreted, allocated or copied, so a bad
request never produces a partially built image.
"""

from __future__ import annotations

from numbers import Integral, Number

from pyimgraw.errors import InvalidArgumentError

# Upper bound on ``width * height``; matches a signed 32-bit element count.
MAX_PIXEL_COUNT = 2**31 - 1


def check_parameter(
    param: Number,
    low: Number | None = None,
    high: Number | None = None,
    *,
    param_name: str = "parameter",
    include_left: bool = True,
    include_right: bool = True,
) -> None:
    """Validate a numeric parameter is within a given range.

    Parameters
    ----------
    param:
        The numeric value to validate.
    low / high:
        Optional bounds. When `None`, the bound is not checked.
    include_left / include_right:
        Whether the comparison is inclusive.
    param_name:
        Used in error messages.
    """

    if not isinstance(param, Number) or isinstance(param, bool):
        raise TypeError(f"{param_name} must be a number, got {type(param).__name__}")

    if low is not None and high is not None and low > high:
        raise ValueError(f"Invalid bounds for {param_name}: low={low} > high={high}")

    if low is not None:
        if include_left:
            if param < low:
                raise InvalidArgumentError(param_name, f"must be >= {low}, got {param}")
        else:
            if param <= low:
                raise InvalidArgumentError(param_name, f"must be > {low}, got {param}")

    if high is not None:
        if include_right:
            if param > high:
                raise InvalidArgumentError(param_name, f"must be <= {high}, got {param}")
        else:
            if param >= high:
                raise InvalidArgumentError(param_name, f"must be < {high}, got {param}")


def _require_int(value: object, *, param_name: str) -> int:
    if not isinstance(value, Integral) or isinstance(value, bool):
        raise InvalidArgumentError(param_name, f"must be an integer, got {type(value).__name__}")
    return int(value)


def check_dimensions(width: int, height: int) -> int:
    """Validate image dimensions and return the pixel count ``width * height``.

    Zero-area requests are valid. Negative values, non-integers and pixel
    counts above `MAX_PIXEL_COUNT` are rejected before the product is used.
    """

    w = _require_int(width, param_name="width")
    h = _require_int(height, param_name="height")
    check_parameter(w, low=0, param_name="width")
    check_parameter(h, low=0, param_name="height")

    if w and h > MAX_PIXEL_COUNT // w:
        raise InvalidArgumentError(
            "width",
            f"image of {w}x{h} exceeds the maximum of {MAX_PIXEL_COUNT} pixels",
        )
    return w * h


def check_buffer_length(length: int, required: int, *, param_name: str = "data") -> None:
    """Raise `InvalidArgumentError` unless ``length >= required``."""

    if int(length) < int(required):
        raise InvalidArgumentError(
            param_name,
            f"buffer holds {int(length)} pixel units, at least {int(required)} required",
        )
