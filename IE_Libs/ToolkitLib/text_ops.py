"""
TrueType text drawing and measuring.

Both operations need Pillow's FreeType support. When it is missing they
return a CAPABILITY_UNAVAILABLE failure instead of raising, so effects using
fonts can report it cleanly.

Bounding boxes are 8 numbers making four points, in this order: lower left,
lower right, upper right, upper left. Angles are in degrees, counter-clockwise.

Functions:
    text_bounding_box: Bounding box of a string relative to its baseline origin
    draw_text: Draw a string with its baseline origin at (x, y)
"""

import logging
import math
from typing import Any, List, Optional

from IE_Libs.pillow_compat import Image, ImageDraw, ImageFont
from IE_Libs.ToolkitLib.errors import ErrorKind, OperationResult
from IE_Libs.ToolkitLib.toolkit_features import (
    ToolkitFeatures,
    detect_toolkit_features,
)

logger = logging.getLogger(__name__)

# Left end of the text baseline
_BASELINE_ANCHOR = "ls"


def _unavailable(operation: str) -> OperationResult:
    message = (
        f"FreeType support is not available for {operation}(), "
        f"and image effects using fonts cannot be executed"
    )
    logger.warning(message)
    return OperationResult.failure(ErrorKind.CAPABILITY_UNAVAILABLE, message)


def _load_font(font_file: str, size: float) -> Any:
    return ImageFont.truetype(font_file, size)


def _rotate_point(x: float, y: float, angle: float):
    # Counter-clockwise on screen, where y grows downward
    theta = math.radians(angle)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return x * cos_t + y * sin_t, -x * sin_t + y * cos_t


def _bounding_box(font: Any, angle: float, text: str) -> List[int]:
    left, top, right, bottom = font.getbbox(text, anchor=_BASELINE_ANCHOR)
    corners = [(left, bottom), (right, bottom), (right, top), (left, top)]
    points: List[int] = []
    for corner_x, corner_y in corners:
        rx, ry = _rotate_point(corner_x, corner_y, angle)
        points.extend((int(round(rx)), int(round(ry))))
    return points


def text_bounding_box(
    size: float,
    angle: float,
    font_file: str,
    text: str,
    features: Optional[ToolkitFeatures] = None,
) -> OperationResult[List[int]]:
    """
    Measure the bounding box of a string.

    Args:
        size: The font size
        angle: The angle in degrees
        font_file: Path to the TrueType font to use
        text: The string to be measured
        features: Detected capabilities (default: detect_toolkit_features())

    Returns:
        OperationResult holding 8 coordinates relative to the baseline origin,
        or a CAPABILITY_UNAVAILABLE failure

    Raises:
        OSError: If the font file cannot be loaded
    """
    features = features or detect_toolkit_features()
    if not features.freetype:
        return _unavailable("text_bounding_box")

    font = _load_font(font_file, size)
    return OperationResult.success(_bounding_box(font, angle, text))


def draw_text(
    image: Any,
    size: float,
    angle: float,
    x: int,
    y: int,
    color: Any,
    font_file: str,
    text: str,
    features: Optional[ToolkitFeatures] = None,
) -> OperationResult[List[int]]:
    """
    Draw a string onto an image.

    The coordinates given by x and y define the basepoint of the first
    character (roughly its lower-left corner, on the baseline).

    Args:
        image: PIL Image to draw on (modified in place)
        size: The font size
        angle: The angle in degrees
        x: X-coordinate of the basepoint
        y: Y-coordinate of the basepoint
        color: Drawing color for the image's mode
               (see allocate_color_from_rgba)
        font_file: Path to the TrueType font to use
        text: The string to draw
        features: Detected capabilities (default: detect_toolkit_features())

    Returns:
        OperationResult holding the 8 bounding box coordinates of the drawn
        text in image coordinates, or a CAPABILITY_UNAVAILABLE failure

    Raises:
        TypeError: If image is not a PIL Image
        OSError: If the font file cannot be loaded
    """
    if not hasattr(image, "paste"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    features = features or detect_toolkit_features()
    if not features.freetype:
        return _unavailable("draw_text")

    font = _load_font(font_file, size)
    box = _bounding_box(font, angle, text)

    if angle % 360 == 0:
        ImageDraw.Draw(image).text(
            (x, y), text, fill=color, font=font, anchor=_BASELINE_ANCHOR
        )
    else:
        _draw_rotated_text(image, font, angle, x, y, color, text)

    placed = [value + (y if i % 2 else x) for i, value in enumerate(box)]
    return OperationResult.success(placed)


def _draw_rotated_text(
    image: Any,
    font: Any,
    angle: float,
    x: int,
    y: int,
    color: Any,
    text: str,
) -> None:
    left, top, right, bottom = font.getbbox(text, anchor=_BASELINE_ANCHOR)
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        return

    # Render the glyphs as a mask, rotate it, then paste the color through it
    mask = Image.new("L", (width, height), 0)
    origin_x, origin_y = -left, -top
    ImageDraw.Draw(mask).text(
        (origin_x, origin_y), text, fill=255, font=font, anchor=_BASELINE_ANCHOR
    )
    rotated = mask.rotate(angle, resample=Image.Resampling.BICUBIC, expand=True)

    rx, ry = _rotate_point(origin_x - width / 2, origin_y - height / 2, angle)
    origin_rx = rotated.width / 2 + rx
    origin_ry = rotated.height / 2 + ry

    image.paste(
        color,
        (int(round(x - origin_rx)), int(round(y - origin_ry))),
        rotated,
    )
