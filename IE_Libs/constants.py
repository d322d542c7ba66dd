"""
Constants and configuration values for the image effects toolkit.

This module centralizes the color-scale bounds, blend limits and effect
defaults used throughout the toolkit and the effects built on it.
"""

# Native (GD-style) alpha scale: 0 is opaque, 127 is transparent
NATIVE_ALPHA_OPAQUE = 0
NATIVE_ALPHA_TRANSPARENT = 127

# 8-bit alpha channel: 0 is transparent, 255 is opaque
CHANNEL_MIN = 0
CHANNEL_MAX = 255

# Opacity percentages
OPACITY_MIN = 0
OPACITY_MAX = 100

# RGBA hex notation: '#RRGGBBAA'
RGB_HEX_LENGTH = 7
HEX_PREFIX = "#"

# Copy-merge blend percentages
BLEND_PCT_MIN = 0
BLEND_PCT_MAX = 100

# Scratch buffer used by the alpha-preserving copy-merge
SCRATCH_MODE = "RGBA"
SCRATCH_FILL = (0, 0, 0, 0)

# Destination modes whose palette cannot hold blended colors
PALETTE_MODES = ("P", "PA")

# Corner order expected by polygon drawing
RECTANGLE_CORNER_ORDER = ("d", "c", "b", "a")

# Effect type names
EFFECT_TYPE_WATERMARK = "Watermark"
EFFECT_TYPE_TEXT_OVERLAY = "Text Overlay"
EFFECT_TYPE_CONTRAST = "Contrast"

# Effect defaults
DEFAULT_WATERMARK_OPACITY = 100
DEFAULT_TEXT_SIZE = 16
DEFAULT_TEXT_COLOR = "#000000FF"
DEFAULT_TEXT_PADDING = 0
CONTRAST_LEVEL_MIN = -100
CONTRAST_LEVEL_MAX = 100
CONTRAST_PIVOT = 128
