"""
Runtime capability detection for the raster library.

Optional Pillow capabilities are probed once and cached in a frozen
ToolkitFeatures instance, which operations consult instead of probing on
every call.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from IE_Libs.pillow_compat import Image, features

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolkitFeatures:
    """Capabilities of the installed Pillow build.

    Attributes:
        freetype: TrueType font loading, text drawing and measuring
        pillow_version: Version string of the installed Pillow
    """
    freetype: bool = False
    pillow_version: str = ""


@lru_cache(maxsize=None)
def detect_toolkit_features() -> ToolkitFeatures:
    """Probe the installed Pillow build once and cache the result."""
    detected = ToolkitFeatures(
        freetype=bool(features.check_module("freetype2")),
        pillow_version=str(getattr(Image, "__version__", "")),
    )
    logger.debug(f"Detected toolkit features: {detected}")
    return detected
