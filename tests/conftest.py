"""
Pytest configuration and shared fixtures for image effects tests.

This module provides shared test images, a FreeType font and
toolkit feature sets used across multiple test modules.
"""

from unittest.mock import patch

import pytest
from PIL import Image, ImageFont

from IE_Libs.ToolkitLib.toolkit_features import ToolkitFeatures


@pytest.fixture
def red_image():
    """Provide a 40x20 opaque red RGBA image."""
    return Image.new("RGBA", (40, 20), (255, 0, 0, 255))


@pytest.fixture
def green_image():
    """Provide a 40x20 opaque green RGBA image."""
    return Image.new("RGBA", (40, 20), (0, 255, 0, 255))


@pytest.fixture
def patterned_image():
    """
    Provide a 30x30 RGBA image where every pixel is distinct.

    Returns:
        RGBA Image with channels derived from the pixel coordinates
    """
    img = Image.new("RGBA", (30, 30))
    pixels = img.load()
    for y in range(30):
        for x in range(30):
            pixels[x, y] = (x * 8, y * 8, (x + y) * 4, 255 - x - y)
    return img


@pytest.fixture
def sample_rgba_hex_colors():
    """
    Provide '#RRGGBBAA' strings with their expected decoded values.

    Returns:
        List of (hex, (red, green, blue, native_alpha)) tuples
    """
    return [
        ("#FF0000FF", (255, 0, 0, 0)),      # Opaque red
        ("#00FF0000", (0, 255, 0, 127)),    # Transparent green
        ("#0000FF80", (0, 0, 255, 64)),     # Half-transparent blue
        ("#abcdefff", (171, 205, 239, 0)),  # Lowercase digits
    ]


@pytest.fixture
def freetype_features():
    """Provide toolkit features with FreeType available."""
    return ToolkitFeatures(freetype=True, pillow_version="test")


@pytest.fixture
def no_freetype_features():
    """Provide toolkit features with FreeType missing."""
    return ToolkitFeatures(freetype=False, pillow_version="test")


@pytest.fixture
def truetype_font():
    """
    Provide Pillow's bundled FreeType font at size 24.

    Skips the test when this Pillow build cannot provide one.
    """
    try:
        font = ImageFont.load_default(size=24)
    except TypeError:
        pytest.skip("Pillow too old to load a sized default font")
    if not isinstance(font, ImageFont.FreeTypeFont):
        pytest.skip("Pillow built without FreeType")
    return font


@pytest.fixture
def patched_font(truetype_font):
    """Make the toolkit load the bundled font whatever path it is given."""
    with patch(
        "IE_Libs.ToolkitLib.text_ops._load_font", return_value=truetype_font
    ) as mock_load:
        yield mock_load
