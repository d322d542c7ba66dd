"""
IE_Libs - Image Effects Library Modules

This package contains the image effects toolkit, organized into
specialized sub-packages:

- ToolkitLib: Raster helpers (RGBA colors, alpha-preserving copy-merge,
  text drawing, rectangle corners)
- EffectsLib: Image effects built on the toolkit (watermark, text overlay,
  contrast)
"""

__version__ = "0.1.0"
