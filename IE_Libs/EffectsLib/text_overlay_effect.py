"""
Text Overlay Effect.

Draws a string onto an image in an '#RRGGBBAA' color, optionally over a
filled background rectangle that follows the text's rotation. Text and
background are drawn on a transparent layer that is then alpha-composited
onto the image, so semi-transparent colors blend with what is underneath.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from IE_Libs.constants import (
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_PADDING,
    DEFAULT_TEXT_SIZE,
    EFFECT_TYPE_TEXT_OVERLAY,
)
from IE_Libs.pillow_compat import Image, ImageDraw
from IE_Libs.ToolkitLib.color_utility import allocate_color_from_rgba
from IE_Libs.ToolkitLib.geometry import PositionedRectangle, get_rectangle_corners
from IE_Libs.ToolkitLib.text_ops import draw_text, text_bounding_box
from IE_Libs.ToolkitLib.toolkit_features import ToolkitFeatures

logger = logging.getLogger(__name__)


@dataclass
class TextOverlayEffectConfig:
    """Configuration for the text overlay effect.

    Attributes:
        text: String to draw
        font_file: Path to a TrueType font
        size: Font size
        angle: Counter-clockwise rotation in degrees
        x: X-coordinate of the text's baseline origin
        y: Y-coordinate of the text's baseline origin
        color: Text color as '#RRGGBBAA'
        background_color: Optional background color as '#RRGGBBAA'
        padding: Background padding around the text, in pixels
    """
    text: str = ""
    font_file: str = ""
    size: float = DEFAULT_TEXT_SIZE
    angle: float = 0.0
    x: int = 0
    y: int = 0
    color: str = DEFAULT_TEXT_COLOR
    background_color: Optional[str] = None
    padding: int = DEFAULT_TEXT_PADDING

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"size must be > 0, got {self.size}")
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextOverlayEffectConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def _background_rectangle(
    box: List[int],
    x: int,
    y: int,
    angle: float,
    padding: int,
) -> PositionedRectangle:
    # box is the unrotated bounding box relative to the baseline origin
    left, bottom, right, top = box[0], box[1], box[2], box[5]
    rect = PositionedRectangle(right - left + 2 * padding, bottom - top + 2 * padding)
    rect.translate(x + left - padding, y + top - padding)
    if angle % 360:
        rect.rotate(angle, center=(x, y))
    return rect


def apply_text_overlay(
    image: Any,
    config: TextOverlayEffectConfig,
    features: Optional[ToolkitFeatures] = None,
) -> Any:
    """
    Draw text onto a copy of an image.

    Args:
        image: PIL Image to draw on
        config: Text overlay settings
        features: Detected capabilities (default: detect_toolkit_features())

    Returns:
        PIL Image (RGBA mode) with the text drawn

    Raises:
        TypeError: If image is not a PIL Image
        ToolkitOperationError: If a color is malformed or FreeType is missing
        OSError: If the font file cannot be loaded
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    result = image.convert("RGBA")
    if not config.text:
        return result

    layer = Image.new("RGBA", result.size, (0, 0, 0, 0))
    ink = allocate_color_from_rgba(layer, config.color).unwrap()

    if config.background_color:
        fill = allocate_color_from_rgba(layer, config.background_color).unwrap()
        box = text_bounding_box(
            config.size, 0, config.font_file, config.text, features
        ).unwrap()
        rect = _background_rectangle(
            box, config.x, config.y, config.angle, config.padding
        )
        ImageDraw.Draw(layer).polygon(get_rectangle_corners(rect), fill=fill)

    placed = draw_text(
        layer,
        config.size,
        config.angle,
        config.x,
        config.y,
        ink,
        config.font_file,
        config.text,
        features,
    ).unwrap()
    logger.debug(f"Drew text {config.text!r} with bounding box {placed}")

    return Image.alpha_composite(result, layer)


def execute_text_overlay_effect(effect: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute text overlay effect.

    Effect dict should contain:
        - 'text', 'font_file': What to draw and with which font
        - 'size', 'angle', 'x', 'y', 'color': Optional drawing settings
        - 'background_color', 'padding': Optional background settings

    Inputs:
        - [0]: Image to draw on (PIL Image)

    Returns:
        PIL Image (RGBA mode) with the text drawn

    Raises:
        ValueError: If no input or no font file
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("TextOverlayEffect requires image input")

    config = TextOverlayEffectConfig.from_dict(effect)
    if config.text and not config.font_file:
        raise ValueError("TextOverlayEffect requires a font_file")

    return apply_text_overlay(inputs[0], config)


def create_text_overlay_effect(
    effect_id: str,
    text: str,
    font_file: str,
    **text_params: Any,
) -> Dict[str, Any]:
    """
    Create text overlay effect dict.

    Args:
        effect_id: Unique effect identifier
        text: String to draw
        font_file: Path to a TrueType font
        **text_params: size, angle, x, y, color, background_color, padding

    Returns:
        Effect dict

    Example:
        >>> effect = create_text_overlay_effect(
        ...     "caption-1",
        ...     "Sample",
        ...     "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        ...     size=24,
        ...     x=10,
        ...     y=40,
        ...     color="#FFFFFFCC",
        ...     background_color="#00000080",
        ...     padding=4,
        ... )
    """
    effect = {
        "id": effect_id,
        "type": EFFECT_TYPE_TEXT_OVERLAY,
        "text": text,
        "font_file": font_file,
    }
    effect.update(text_params)
    return effect
