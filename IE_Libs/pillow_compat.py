"""
Compatibility wrapper that loads Pillow (which provides the `PIL` namespace)
and re-exports the modules the toolkit works with.

Pillow's modules are loaded via importlib so the rest of the package imports
`Image`, `ImageColor`, `ImageDraw`, `ImageFont` and `features`
from one place.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageColor = import_module("PIL.ImageColor")
ImageDraw = import_module("PIL.ImageDraw")
ImageFont = import_module("PIL.ImageFont")
features = import_module("PIL.features")
