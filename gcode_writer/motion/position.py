"""Fixed-point XYZ positions and offsets.

Coordinates are stored as integers holding the true value multiplied by
``COORDINATE_MULT`` (2**16). Sums and differences stay exact, so a toolpath
built from thousands of relative offsets does not drift the way repeated float
accumulation would.

Every axis is independently optional. An absent axis is not zero: it means the
axis is not part of this position (or offset) at all, and the writer omits it
from the emitted move.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from gcode_writer.errors import OutOfRangeError

COORDINATE_MULT = 1 << 16

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

RawTriple = Tuple[Optional[int], Optional[int], Optional[int]]
FloatTriple = Tuple[Optional[float], Optional[float], Optional[float]]


def float_to_fixed(value: float) -> int:
    """Convert a float to the fixed-point representation used by :class:`GCodePosition`.

    The scaled value is truncated toward zero. Raises :class:`OutOfRangeError`
    if it does not fit a signed 64-bit integer or is not finite.
    """
    try:
        scaled = float(value) * COORDINATE_MULT
    except OverflowError as exc:
        raise OutOfRangeError(f"{value!r} does not fit the fixed-point range") from exc
    if not math.isfinite(scaled) or not (INT64_MIN <= scaled <= INT64_MAX):
        raise OutOfRangeError(f"{value!r} does not fit the fixed-point range")
    return int(scaled)


def fixed_to_float(value: int) -> float:
    return value / COORDINATE_MULT


def _check_range(value: int) -> int:
    if not (INT64_MIN <= value <= INT64_MAX):
        raise OutOfRangeError(f"fixed-point result {value} overflows 64 bits")
    return value


def _trunc_div(numerator: int, denominator: int) -> int:
    # Python's // floors; fixed-point rescaling truncates toward zero.
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _optional_fixed(value: Optional[float]) -> Optional[int]:
    return None if value is None else float_to_fixed(value)


def _combine(left: Optional[int], right: Optional[int], sign: int) -> Optional[int]:
    if left is None or right is None:
        return left
    return _check_range(left + sign * right)


@dataclass(frozen=True)
class GCodePosition:
    """A position (or offset) with optional fixed-point X, Y and Z components.

    Instances are immutable values. ``pos += offset`` rebinds ``pos`` to a new
    instance rather than mutating the old one.

    ``str()`` renders present axes with Python float text and absent ones as
    ``_``, e.g. ``"(1.0,_,3.5)"``. Magnitudes of 1e16 and above, and nonzero
    magnitudes below 1e-4, use exponent form (``"1e+16"``, ``"1.52587890625e-05"``).

    Addition and subtraction combine an axis only when both operands define it;
    otherwise the left operand's axis is passed through unchanged (which may
    itself be absent)::

        >>> a = GCodePosition.from_float(1.0, 2.0, None)
        >>> b = GCodePosition.from_float(0.5, None, 7.0)
        >>> str(a + b)
        '(1.5,2.0,_)'
    """

    raw_x: Optional[int] = None
    raw_y: Optional[int] = None
    raw_z: Optional[int] = None

    # -- construction ----------------------------------------------------
    @classmethod
    def from_float(
        cls,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None,
    ) -> "GCodePosition":
        """Build a position from floats; fails as a whole if any axis overflows."""
        return cls(_optional_fixed(x), _optional_fixed(y), _optional_fixed(z))

    @classmethod
    def from_float_full(cls, x: float, y: float, z: float) -> "GCodePosition":
        return cls.from_float(x, y, z)

    @classmethod
    def from_raw(
        cls,
        x: Optional[int] = None,
        y: Optional[int] = None,
        z: Optional[int] = None,
    ) -> "GCodePosition":
        """Build a position from values already in fixed-point form. No checks are applied."""
        return cls(x, y, z)

    @classmethod
    def from_raw_full(cls, x: int, y: int, z: int) -> "GCodePosition":
        return cls(x, y, z)

    # -- accessors -------------------------------------------------------
    @property
    def x(self) -> Optional[float]:
        return None if self.raw_x is None else fixed_to_float(self.raw_x)

    @property
    def y(self) -> Optional[float]:
        return None if self.raw_y is None else fixed_to_float(self.raw_y)

    @property
    def z(self) -> Optional[float]:
        return None if self.raw_z is None else fixed_to_float(self.raw_z)

    def as_floats(self) -> FloatTriple:
        return self.x, self.y, self.z

    def as_raw(self) -> RawTriple:
        return self.raw_x, self.raw_y, self.raw_z

    # -- arithmetic ------------------------------------------------------
    def __add__(self, other: "GCodePosition") -> "GCodePosition":
        if not isinstance(other, GCodePosition):
            return NotImplemented
        return GCodePosition(
            _combine(self.raw_x, other.raw_x, 1),
            _combine(self.raw_y, other.raw_y, 1),
            _combine(self.raw_z, other.raw_z, 1),
        )

    def __sub__(self, other: "GCodePosition") -> "GCodePosition":
        if not isinstance(other, GCodePosition):
            return NotImplemented
        return GCodePosition(
            _combine(self.raw_x, other.raw_x, -1),
            _combine(self.raw_y, other.raw_y, -1),
            _combine(self.raw_z, other.raw_z, -1),
        )

    def __mul__(self, scalar: float) -> "GCodePosition":
        if isinstance(scalar, GCodePosition):
            return NotImplemented
        factor = float_to_fixed(scalar)

        def scale(value: Optional[int]) -> Optional[int]:
            if value is None:
                return None
            return _check_range(_trunc_div(value * factor, COORDINATE_MULT))

        return GCodePosition(scale(self.raw_x), scale(self.raw_y), scale(self.raw_z))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "GCodePosition":
        if isinstance(scalar, GCodePosition):
            return NotImplemented
        divisor = float_to_fixed(scalar)
        if divisor == 0:
            raise OutOfRangeError(f"cannot divide by {scalar!r}: fixed-point divisor is zero")

        def scale(value: Optional[int]) -> Optional[int]:
            if value is None:
                return None
            return _check_range(_trunc_div(value * COORDINATE_MULT, divisor))

        return GCodePosition(scale(self.raw_x), scale(self.raw_y), scale(self.raw_z))

    # -- rendering -------------------------------------------------------
    def __str__(self) -> str:
        parts = ["_" if value is None else str(value) for value in self.as_floats()]
        return "(" + ",".join(parts) + ")"


GCodeOffset = GCodePosition
