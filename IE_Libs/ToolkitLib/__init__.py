"""
ToolkitLib - Raster helpers for image effects

This module provides RGBA color decoding and allocation, the alpha-preserving
copy-merge, capability-checked text drawing and rectangle corner extraction.
"""

from IE_Libs.ToolkitLib.errors import (
    ErrorKind,
    OperationResult,
    ToolkitError,
    ToolkitOperationError,
)
from IE_Libs.ToolkitLib.image_models import DrawColor, GdColor, Region
from IE_Libs.ToolkitLib.color_utility import (
    allocate_color_from_rgba,
    hex_to_rgba,
    is_rgba_hex,
    native_alpha_to_channel,
    native_alpha_to_opacity,
    opacity_to_native_alpha,
    rgba_to_opacity,
)
from IE_Libs.ToolkitLib.composite import image_copy, image_copy_merge_alpha
from IE_Libs.ToolkitLib.geometry import PositionedRectangle, get_rectangle_corners
from IE_Libs.ToolkitLib.text_ops import draw_text, text_bounding_box
from IE_Libs.ToolkitLib.toolkit_features import (
    ToolkitFeatures,
    detect_toolkit_features,
)

__all__ = [
    "ErrorKind",
    "OperationResult",
    "ToolkitError",
    "ToolkitOperationError",
    "DrawColor",
    "GdColor",
    "Region",
    "allocate_color_from_rgba",
    "hex_to_rgba",
    "is_rgba_hex",
    "native_alpha_to_channel",
    "native_alpha_to_opacity",
    "opacity_to_native_alpha",
    "rgba_to_opacity",
    "image_copy",
    "image_copy_merge_alpha",
    "PositionedRectangle",
    "get_rectangle_corners",
    "draw_text",
    "text_bounding_box",
    "ToolkitFeatures",
    "detect_toolkit_features",
]
