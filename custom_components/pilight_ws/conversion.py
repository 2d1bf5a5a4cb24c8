"""Conversion between pilight dim levels and percentage brightness."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from .const import DEFAULT_DIMLEVEL_MAX, DEFAULT_DIMLEVEL_MIN
from .exceptions import ConversionError

BRIGHTNESS_MIN = 0
BRIGHTNESS_MAX = 100


def _round_half_up(value: float) -> int:
    """Round ``value`` to the nearest integer, halves away from zero."""

    return math.floor(value + 0.5)


def is_number(value: object) -> bool:
    """Return True for real numbers, excluding booleans."""

    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class DimLevelRange:
    """Inclusive range of dim levels accepted by a pilight dimmer.

    Brightness is a 0..100 percentage. Dim levels map linearly onto it with
    ``maximum`` at 100%, so each level owns a bucket of ``100 / maximum``
    percent and converting a brightness back and forth lands in the same
    bucket.
    """

    minimum: int = DEFAULT_DIMLEVEL_MIN
    maximum: int = DEFAULT_DIMLEVEL_MAX

    def __post_init__(self) -> None:
        """Reject ranges that cannot be mapped onto a percentage."""

        if not (isinstance(self.minimum, int) and isinstance(self.maximum, int)):
            raise ValueError("Dim level bounds must be integers")
        if self.minimum < 1 or self.maximum < self.minimum:
            raise ValueError(
                f"Invalid dim level range {self.minimum}..{self.maximum}"
            )

    def __contains__(self, dim_level: object) -> bool:
        return (
            isinstance(dim_level, int)
            and not isinstance(dim_level, bool)
            and self.minimum <= dim_level <= self.maximum
        )

    def to_brightness(self, dim_level: int) -> int:
        """Return the brightness percentage for ``dim_level``."""

        if dim_level not in self:
            raise ConversionError(
                f"Dim level {dim_level!r} outside {self.minimum}..{self.maximum}"
            )
        return _round_half_up(dim_level * BRIGHTNESS_MAX / self.maximum)

    def to_dim_level(self, brightness: float) -> int:
        """Return the dim level whose bucket contains ``brightness``.

        Zero is not representable; callers treat it as "no change" before
        converting.
        """

        if not is_number(brightness) or math.isnan(brightness):
            raise ConversionError(f"Brightness {brightness!r} is not a number")
        if not BRIGHTNESS_MIN < brightness <= BRIGHTNESS_MAX:
            raise ConversionError(
                f"Brightness {brightness!r} outside {BRIGHTNESS_MIN}..{BRIGHTNESS_MAX}"
            )
        level = _round_half_up(brightness * self.maximum / BRIGHTNESS_MAX)
        return max(self.minimum, level)
