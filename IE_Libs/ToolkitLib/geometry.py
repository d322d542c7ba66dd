"""
Positioned rectangles and their corner coordinates.

A PositionedRectangle keeps four named corner points, which stay named
through translation and rotation:

    a ---- b
    |      |
    d ---- c

Polygon drawing wants a flat list of coordinates instead; see
get_rectangle_corners().
"""

import math
from typing import Dict, List, Optional, Tuple

from IE_Libs.constants import RECTANGLE_CORNER_ORDER

Point = Tuple[float, float]


class PositionedRectangle:
    """Rectangle with named corners 'a', 'b', 'c' and 'd'."""

    def __init__(self, width: float = 0, height: float = 0):
        self._points: Dict[str, Point] = {
            "a": (0, 0),
            "b": (width, 0),
            "c": (width, height),
            "d": (0, height),
        }

    @classmethod
    def from_corners(cls, corners: Dict[str, Point]) -> "PositionedRectangle":
        rect = cls()
        for name in RECTANGLE_CORNER_ORDER:
            if name not in corners:
                raise ValueError(f"Missing corner '{name}'")
            rect.set_point(name, corners[name])
        return rect

    def get_point(self, name: str) -> Point:
        if name not in self._points:
            raise KeyError(f"Unknown corner '{name}'. Corners: a, b, c, d")
        return self._points[name]

    def set_point(self, name: str, point: Point) -> "PositionedRectangle":
        if name not in self._points:
            raise KeyError(f"Unknown corner '{name}'. Corners: a, b, c, d")
        x, y = point
        self._points[name] = (x, y)
        return self

    def translate(self, dx: float, dy: float) -> "PositionedRectangle":
        for name, (x, y) in self._points.items():
            self._points[name] = (x + dx, y + dy)
        return self

    def rotate(self, angle: float, center: Optional[Point] = None) -> "PositionedRectangle":
        """
        Rotate the corners counter-clockwise (on screen) around a center.

        Args:
            angle: Rotation in degrees
            center: Pivot point (default: the rectangle's center)
        """
        if center is None:
            left, top, right, bottom = self.get_bounding_box()
            center = ((left + right) / 2, (top + bottom) / 2)
        cx, cy = center
        theta = math.radians(angle)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        for name, (x, y) in self._points.items():
            dx, dy = x - cx, y - cy
            self._points[name] = (
                cx + dx * cos_t + dy * sin_t,
                cy - dx * sin_t + dy * cos_t,
            )
        return self

    def get_bounding_box(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of the smallest box holding all corners."""
        xs = [x for x, _ in self._points.values()]
        ys = [y for _, y in self._points.values()]
        return min(xs), min(ys), max(xs), max(ys)


def get_rectangle_corners(rect) -> List[float]:
    """
    Convert a rectangle to a flat sequence of point coordinates.

    Args:
        rect: Object exposing get_point(name) for corners 'a' to 'd'
              (usually a PositionedRectangle)

    Returns:
        8 coordinates, x then y, for corners d, c, b and a in that order
    """
    points: List[float] = []
    for name in RECTANGLE_CORNER_ORDER:
        x, y = rect.get_point(name)
        points.append(x)
        points.append(y)
    return points
