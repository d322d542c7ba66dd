"""
Data models for the image toolkit.

Classes:
    GdColor: A color on the native alpha scale (0 opaque, 127 transparent)
    Region: An axis-aligned rectangle of pixels

Type Aliases:
    DrawColor: The fill value Pillow drawing calls accept for an image mode
"""

from dataclasses import dataclass
from typing import Tuple, Union

from IE_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    NATIVE_ALPHA_OPAQUE,
    NATIVE_ALPHA_TRANSPARENT,
)

DrawColor = Union[int, Tuple[int, ...]]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


@dataclass(frozen=True)
class GdColor:
    red: int
    green: int
    blue: int
    alpha: int = NATIVE_ALPHA_OPAQUE

    def __post_init__(self):
        # Frozen dataclass: clamp through object.__setattr__
        for name in ("red", "green", "blue"):
            object.__setattr__(
                self, name, _clamp(getattr(self, name), CHANNEL_MIN, CHANNEL_MAX)
            )
        object.__setattr__(
            self,
            "alpha",
            _clamp(self.alpha, NATIVE_ALPHA_OPAQUE, NATIVE_ALPHA_TRANSPARENT),
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.red, self.green, self.blue, self.alpha


@dataclass(frozen=True)
class Region:
    """Rectangle of pixels with its top-left at (x, y)."""
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) box as used by Image.crop()."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def fits_within(self, size: Tuple[int, int]) -> bool:
        width, height = size
        return (
            self.width > 0
            and self.height > 0
            and self.x >= 0
            and self.y >= 0
            and self.x + self.width <= width
            and self.y + self.height <= height
        )
