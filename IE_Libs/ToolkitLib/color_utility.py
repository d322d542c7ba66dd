"""
RGBA hex color decoding and color allocation.

Colors are configured as '#RRGGBBAA' strings, where AA is the opacity byte
(#00 transparent, #FF opaque). The toolkit works on the native alpha scale,
where 0 is completely opaque and 127 completely transparent:

    native_alpha = 127 - floor((opacity_percent / 100) * 127)

Functions:
    is_rgba_hex: Structural check of a '#RRGGBBAA' string
    rgba_to_opacity: Opacity percentage (0-100) of a '#RRGGBBAA' string
    opacity_to_native_alpha: Opacity percentage to native alpha
    native_alpha_to_opacity: Native alpha back to an opacity percentage
    native_alpha_to_channel: Native alpha to an 8-bit alpha channel value
    hex_to_rgba: Decode '#RRGGBBAA' into a GdColor
    allocate_color_from_rgba: Drawing color for an image from '#RRGGBBAA'
"""

import math
import re
from typing import Any

from IE_Libs.constants import (
    CHANNEL_MAX,
    HEX_PREFIX,
    NATIVE_ALPHA_TRANSPARENT,
    OPACITY_MAX,
    OPACITY_MIN,
    RGB_HEX_LENGTH,
)
from IE_Libs.pillow_compat import ImageColor
from IE_Libs.ToolkitLib.errors import ErrorKind, OperationResult
from IE_Libs.ToolkitLib.image_models import DrawColor, GdColor

_RGBA_HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{8}")


def is_rgba_hex(value: Any) -> bool:
    """Return True if value is a well-formed '#RRGGBBAA' string."""
    return isinstance(value, str) and _RGBA_HEX_PATTERN.fullmatch(value) is not None


def rgba_to_opacity(rgba_hex: str) -> int:
    """
    Get the opacity percentage of a '#RRGGBBAA' color.

    The AA byte is mapped linearly and truncated: #00 is 0, #FF is 100.

    Raises:
        ValueError: If rgba_hex is not a '#RRGGBBAA' string
    """
    if not is_rgba_hex(rgba_hex):
        raise ValueError(f"Expected '#RRGGBBAA' color, got {rgba_hex!r}")
    alpha_byte = int(rgba_hex[RGB_HEX_LENGTH:], 16)
    return int(alpha_byte / CHANNEL_MAX * OPACITY_MAX)


def opacity_to_native_alpha(opacity: float) -> int:
    """Convert an opacity percentage (0-100) to native alpha (0-127)."""
    opacity = max(OPACITY_MIN, min(OPACITY_MAX, opacity))
    return NATIVE_ALPHA_TRANSPARENT - math.floor(
        (opacity / OPACITY_MAX) * NATIVE_ALPHA_TRANSPARENT
    )


def native_alpha_to_opacity(alpha: int) -> int:
    """Convert native alpha (0-127) back to an opacity percentage (0-100)."""
    alpha = max(0, min(NATIVE_ALPHA_TRANSPARENT, int(alpha)))
    return round(
        (NATIVE_ALPHA_TRANSPARENT - alpha) / NATIVE_ALPHA_TRANSPARENT * OPACITY_MAX
    )


def native_alpha_to_channel(alpha: int) -> int:
    """
    Convert native alpha (0-127) to an 8-bit alpha channel value (0-255).

    Uses the same expansion libgd applies when writing PNG alpha, so 0 maps
    to 255 (opaque) and 127 maps to 0 (transparent).
    """
    alpha = max(0, min(NATIVE_ALPHA_TRANSPARENT, int(alpha)))
    return CHANNEL_MAX - ((alpha << 1) + (alpha >> 6))


def hex_to_rgba(rgba_hex: Any) -> OperationResult[GdColor]:
    """
    Decode a '#RRGGBBAA' string into its red, green, blue and native alpha.

    Args:
        rgba_hex: A string specifying an RGBA color in the format '#RRGGBBAA'

    Returns:
        OperationResult holding a GdColor, or an INVALID_COLOR_FORMAT failure
        when the string is malformed
    """
    if not is_rgba_hex(rgba_hex):
        return OperationResult.failure(
            ErrorKind.INVALID_COLOR_FORMAT,
            f"'{rgba_hex}' is not a valid '{HEX_PREFIX}RRGGBBAA' color",
        )

    rgb_hex = rgba_hex[1:RGB_HEX_LENGTH]
    red, green, blue = (int(rgb_hex[i:i + 2], 16) for i in (0, 2, 4))
    alpha = opacity_to_native_alpha(rgba_to_opacity(rgba_hex))
    return OperationResult.success(GdColor(red, green, blue, alpha))


def allocate_color_from_rgba(image: Any, rgba_hex: Any) -> OperationResult[DrawColor]:
    """
    Get a drawing color for an image from a '#RRGGBBAA' string.

    Args:
        image: PIL Image the color will be drawn on
        rgba_hex: A string specifying an RGBA color in the format '#RRGGBBAA'

    Returns:
        OperationResult holding a color value suited to the image's mode
        (an RGBA tuple for RGBA images), or the decode failure

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    decoded = hex_to_rgba(rgba_hex)
    if not decoded.ok:
        return decoded

    color = decoded.value
    channel_alpha = native_alpha_to_channel(color.alpha)
    color_hex = f"#{color.red:02x}{color.green:02x}{color.blue:02x}{channel_alpha:02x}"
    return OperationResult.success(ImageColor.getcolor(color_hex, image.mode))
