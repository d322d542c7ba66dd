"""
Contrast Effect.

Adjusts contrast by a level between -100 and 100. Each color channel is
scaled around the fixed mid-grey:

    v -> 128 + (v - 128) * (1 + level / 100)

clamped to 0-255, so -100 flattens every pixel to mid-grey, 0 leaves the
image unchanged and 100 doubles the distance from mid-grey. Only the color
channels are adjusted; alpha is carried over untouched.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from IE_Libs.constants import (
    CONTRAST_LEVEL_MAX,
    CONTRAST_LEVEL_MIN,
    CONTRAST_PIVOT,
    EFFECT_TYPE_CONTRAST,
)
from IE_Libs.pillow_compat import Image


@dataclass
class ContrastEffectConfig:
    """Configuration for the contrast effect.

    Attributes:
        level: Contrast change (-100 to 100)
    """
    level: int = 0

    def __post_init__(self):
        if not (CONTRAST_LEVEL_MIN <= self.level <= CONTRAST_LEVEL_MAX):
            raise ValueError(
                f"level must be {CONTRAST_LEVEL_MIN}-{CONTRAST_LEVEL_MAX}, "
                f"got {self.level}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContrastEffectConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def apply_contrast(image: Any, level: int = 0) -> Any:
    """
    Adjust the contrast of an image.

    Args:
        image: PIL Image
        level: Contrast change (-100 to 100)

    Returns:
        Adjusted PIL Image (RGBA mode)

    Raises:
        ValueError: If level out of range
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if not (CONTRAST_LEVEL_MIN <= level <= CONTRAST_LEVEL_MAX):
        raise ValueError(
            f"level must be {CONTRAST_LEVEL_MIN}-{CONTRAST_LEVEL_MAX}, got {level}"
        )

    rgba = image.convert("RGBA")
    if level == 0:
        return rgba

    alpha = rgba.getchannel("A")
    rgb = rgba.convert("RGB")
    # Factors above 1 extrapolate away from the pivot; blend clips to 0-255
    pivot = Image.new("RGB", rgb.size, (CONTRAST_PIVOT,) * 3)
    adjusted = Image.blend(pivot, rgb, 1 + level / 100)
    adjusted.putalpha(alpha)
    return adjusted


def execute_contrast_effect(effect: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute contrast effect.

    Effect dict should contain:
        - 'level': Contrast change (-100 to 100, default 0)

    Inputs:
        - [0]: Image to adjust (PIL Image)

    Returns:
        Adjusted PIL Image (RGBA mode)
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("ContrastEffect requires image input")

    config = ContrastEffectConfig.from_dict(effect)
    return apply_contrast(inputs[0], int(config.level))


def create_contrast_effect(effect_id: str, level: int = 0) -> Dict[str, Any]:
    """Create contrast effect dict."""
    return {
        "id": effect_id,
        "type": EFFECT_TYPE_CONTRAST,
        "level": level,
    }
