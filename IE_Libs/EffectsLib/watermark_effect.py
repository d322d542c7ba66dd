"""
Watermark Effect.

Merges a watermark image onto an image at a given position and opacity.
Below full opacity the merge goes through image_copy_merge_alpha(), so a
semi-transparent watermark keeps its transparency; at full opacity the
watermark is alpha-composited as-is.

Example:
    >>> base = Image.new("RGBA", (200, 100), "white")
    >>> mark = Image.new("RGBA", (50, 20), (0, 0, 255, 128))
    >>> effect = create_watermark_effect("wm-1", watermark_image=mark, x=140, y=70, opacity=60)
    >>> result = execute_watermark_effect(effect, [base])
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from IE_Libs.constants import (
    DEFAULT_WATERMARK_OPACITY,
    EFFECT_TYPE_WATERMARK,
    OPACITY_MAX,
    OPACITY_MIN,
)
from IE_Libs.ToolkitLib.composite import image_copy_merge_alpha

logger = logging.getLogger(__name__)


@dataclass
class WatermarkEffectConfig:
    """Configuration for the watermark effect.

    Attributes:
        watermark_image: PIL Image to merge onto the input
        x: X-coordinate of the watermark's top-left corner (may be negative)
        y: Y-coordinate of the watermark's top-left corner (may be negative)
        opacity: Watermark opacity in percentage (0-100)
    """
    watermark_image: Optional[Any] = None
    x: int = 0
    y: int = 0
    opacity: int = DEFAULT_WATERMARK_OPACITY

    def __post_init__(self):
        if not (OPACITY_MIN <= self.opacity <= OPACITY_MAX):
            raise ValueError(
                f"opacity must be {OPACITY_MIN}-{OPACITY_MAX}, got {self.opacity}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (excludes the image object)."""
        data = asdict(self)
        data["watermark_image"] = None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatermarkEffectConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def apply_watermark(
    image: Any,
    watermark: Any,
    x: int = 0,
    y: int = 0,
    opacity: int = DEFAULT_WATERMARK_OPACITY,
) -> Any:
    """
    Merge a watermark onto a copy of an image.

    The part of the watermark falling outside the image is clipped.

    Args:
        image: PIL Image to watermark
        watermark: PIL Image to merge
        x: X-coordinate of the watermark's top-left corner
        y: Y-coordinate of the watermark's top-left corner
        opacity: Watermark opacity in percentage (0-100)

    Returns:
        Watermarked PIL Image (RGBA mode)

    Raises:
        TypeError: If image or watermark is not a PIL Image
        ValueError: If opacity is not an integer in 0-100
        ToolkitOperationError: If the merge fails
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image for image, got {type(image)}")
    if not hasattr(watermark, "convert"):
        raise TypeError(f"Expected PIL Image for watermark, got {type(watermark)}")

    result = image.convert("RGBA")
    mark = watermark.convert("RGBA")

    left, top = max(x, 0), max(y, 0)
    right = min(x + mark.width, result.width)
    bottom = min(y + mark.height, result.height)
    if right <= left or bottom <= top:
        logger.debug(f"Watermark at ({x}, {y}) falls outside the image, skipped")
        return result

    src_x, src_y = left - x, top - y
    width, height = right - left, bottom - top

    if opacity == OPACITY_MAX:
        result.alpha_composite(mark, (left, top), (src_x, src_y, src_x + width, src_y + height))
        return result

    image_copy_merge_alpha(
        result, mark, left, top, src_x, src_y, width, height, opacity
    ).unwrap()
    return result


def execute_watermark_effect(effect: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute watermark effect.

    Effect dict should contain:
        - 'watermark_image': PIL Image to merge
        - 'x', 'y': Placement of the watermark (default 0, 0)
        - 'opacity': 0-100 (default 100)

    Inputs:
        - [0]: Image to watermark (PIL Image)

    Returns:
        Watermarked PIL Image (RGBA mode)

    Raises:
        ValueError: If no input, no watermark image or invalid opacity
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("WatermarkEffect requires image input")

    config = WatermarkEffectConfig.from_dict(effect)
    if config.watermark_image is None:
        raise ValueError("WatermarkEffect requires a watermark_image")

    return apply_watermark(
        inputs[0],
        config.watermark_image,
        int(config.x),
        int(config.y),
        int(config.opacity),
    )


def create_watermark_effect(
    effect_id: str,
    watermark_image: Optional[Any] = None,
    x: int = 0,
    y: int = 0,
    opacity: int = DEFAULT_WATERMARK_OPACITY,
) -> Dict[str, Any]:
    """
    Create watermark effect dict.

    Args:
        effect_id: Unique effect identifier
        watermark_image: PIL Image to merge
        x: X-coordinate of the watermark's top-left corner
        y: Y-coordinate of the watermark's top-left corner
        opacity: Watermark opacity in percentage (0-100)

    Returns:
        Effect dict
    """
    return {
        "id": effect_id,
        "type": EFFECT_TYPE_WATERMARK,
        "watermark_image": watermark_image,
        "x": x,
        "y": y,
        "opacity": opacity,
    }
