"""
Image Effects Library.

Effects take an image and an effect dict and return a new image.

Modules:
    watermark_effect: Merge a watermark image at a position and opacity
    text_overlay_effect: Draw text, optionally on a background rectangle
    contrast_effect: Adjust contrast while preserving alpha
"""

from IE_Libs.EffectsLib.watermark_effect import (
    WatermarkEffectConfig,
    apply_watermark,
    execute_watermark_effect,
    create_watermark_effect,
)
from IE_Libs.EffectsLib.text_overlay_effect import (
    TextOverlayEffectConfig,
    apply_text_overlay,
    execute_text_overlay_effect,
    create_text_overlay_effect,
)
from IE_Libs.EffectsLib.contrast_effect import (
    ContrastEffectConfig,
    apply_contrast,
    execute_contrast_effect,
    create_contrast_effect,
)

__all__ = [
    "WatermarkEffectConfig",
    "apply_watermark",
    "execute_watermark_effect",
    "create_watermark_effect",
    "TextOverlayEffectConfig",
    "apply_text_overlay",
    "execute_text_overlay_effect",
    "create_text_overlay_effect",
    "ContrastEffectConfig",
    "apply_contrast",
    "execute_contrast_effect",
    "create_contrast_effect",
]
