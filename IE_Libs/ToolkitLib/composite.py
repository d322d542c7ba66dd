"""
Alpha-preserving copy-merge of image regions.

A plain weighted merge of two regions ignores the alpha already carried by
the destination pixels, so a semi-transparent watermark comes out with the
wrong colors and the wrong transparency. image_copy_merge_alpha() routes the
merge through a scratch buffer sized to the region instead:

    1. copy the destination region into the scratch buffer (blend baseline)
    2. composite the source region over it at (0, 0), alpha-aware
    3. blend baseline and scratch at the requested percentage
    4. paste the result back over the destination region, unblended

At 100 percent the region is copied directly and no scratch is used.
Palette destinations are refused with COPY_FAILED, since their palette
cannot represent the merged colors.

Example:
    >>> base = Image.new("RGBA", (40, 20), (255, 0, 0, 255))
    >>> mark = Image.new("RGBA", (40, 20), (0, 255, 0, 255))
    >>> result = image_copy_merge_alpha(base, mark, 0, 0, 0, 0, 40, 20, 50)
    >>> result.ok, base.getpixel((0, 0))
    (True, (128, 128, 0, 255))
"""

import logging
from typing import Any, Callable, Optional, Tuple

from IE_Libs.constants import (
    BLEND_PCT_MAX,
    BLEND_PCT_MIN,
    PALETTE_MODES,
    SCRATCH_FILL,
    SCRATCH_MODE,
)
from IE_Libs.pillow_compat import Image
from IE_Libs.ToolkitLib.errors import ErrorKind, OperationResult
from IE_Libs.ToolkitLib.image_models import Region

logger = logging.getLogger(__name__)

# Creates the scratch buffer for a (width, height) region
ScratchFactory = Callable[[Tuple[int, int]], Any]


def create_scratch_image(size: Tuple[int, int]) -> Any:
    """Create a fully transparent true-color scratch image."""
    return Image.new(SCRATCH_MODE, size, SCRATCH_FILL)


def _validate_pct(pct: Any) -> int:
    if isinstance(pct, bool) or not isinstance(pct, int):
        raise ValueError(f"pct must be an integer, got {pct!r}")
    if not (BLEND_PCT_MIN <= pct <= BLEND_PCT_MAX):
        raise ValueError(
            f"pct must be {BLEND_PCT_MIN}-{BLEND_PCT_MAX}, got {pct}"
        )
    return pct


def _copy_failed(message: str, destination_modified: bool = False) -> OperationResult:
    logger.warning(f"Copy-merge failed: {message}")
    return OperationResult.failure(
        ErrorKind.COPY_FAILED, message, destination_modified
    )


def _check_destination_mode(dst_image: Any) -> Optional[OperationResult]:
    if dst_image.mode in PALETTE_MODES:
        return _copy_failed(
            f"destination mode {dst_image.mode} cannot hold merged colors"
        )
    return None


def image_copy(
    dst_image: Any,
    src_image: Any,
    dst_x: int,
    dst_y: int,
    src_region: Region,
) -> OperationResult[None]:
    """
    Copy a source region onto the destination, replacing its pixels.

    Alpha is copied as-is; no blending takes place.
    """
    refused = _check_destination_mode(dst_image)
    if refused is not None:
        return refused

    try:
        patch = src_image.crop(src_region.box)
        if patch.mode != dst_image.mode:
            patch = patch.convert(dst_image.mode)
    except (ValueError, OSError, MemoryError) as exc:
        return _copy_failed(f"could not read source region {src_region.box}: {exc}")

    try:
        dst_image.paste(patch, (dst_x, dst_y))
    except (ValueError, OSError) as exc:
        return _copy_failed(
            f"could not write region at ({dst_x}, {dst_y}): {exc}",
            destination_modified=True,
        )
    return OperationResult.success()


def image_copy_merge_alpha(
    dst_image: Any,
    src_image: Any,
    dst_x: int,
    dst_y: int,
    src_x: int,
    src_y: int,
    src_w: int,
    src_h: int,
    pct: int,
    scratch_factory: Optional[ScratchFactory] = None,
) -> OperationResult[None]:
    """
    Copy and merge part of an image onto another, preserving alpha.

    The destination is modified in place. On any failure before the final
    copy-back it is left untouched; a failed copy-back is reported with
    `error.destination_modified` set.

    Args:
        dst_image: Destination PIL Image (modified in place)
        src_image: Source PIL Image (read only)
        dst_x: X-coordinate of destination point
        dst_y: Y-coordinate of destination point
        src_x: X-coordinate of source point
        src_y: Y-coordinate of source point
        src_w: Region width
        src_h: Region height
        pct: Opacity of the source region in percentage (0-100)
        scratch_factory: Callable creating the scratch buffer for a
                         (width, height) size (default: transparent RGBA image)

    Returns:
        OperationResult with no value on success; failure kinds are
        RESOURCE_ALLOCATION_FAILED and COPY_FAILED

    Raises:
        TypeError: If either image is not a PIL Image
        ValueError: If pct is not an integer in 0-100
    """
    if not hasattr(dst_image, "paste"):
        raise TypeError(f"Expected PIL Image for dst_image, got {type(dst_image)}")
    if not hasattr(src_image, "crop"):
        raise TypeError(f"Expected PIL Image for src_image, got {type(src_image)}")
    pct = _validate_pct(pct)
    refused = _check_destination_mode(dst_image)
    if refused is not None:
        return refused

    src_region = Region(src_x, src_y, src_w, src_h)
    dst_region = Region(dst_x, dst_y, src_w, src_h)
    if not src_region.fits_within(src_image.size):
        return _copy_failed(
            f"source region {src_region.box} outside source image {src_image.size}"
        )
    if not dst_region.fits_within(dst_image.size):
        return _copy_failed(
            f"destination region {dst_region.box} outside destination image "
            f"{dst_image.size}"
        )

    logger.debug(
        f"Copy-merge {src_w}x{src_h} from ({src_x}, {src_y}) "
        f"to ({dst_x}, {dst_y}) at {pct}%"
    )

    if pct == BLEND_PCT_MAX:
        return image_copy(dst_image, src_image, dst_x, dst_y, src_region)

    factory = scratch_factory or create_scratch_image
    try:
        scratch = factory(dst_region.size)
    except (MemoryError, ValueError, OSError) as exc:
        logger.warning(f"Scratch allocation of {dst_region.size} failed: {exc}")
        return OperationResult.failure(
            ErrorKind.RESOURCE_ALLOCATION_FAILED,
            f"could not allocate {src_w}x{src_h} scratch image: {exc}",
        )
    if scratch is None:
        logger.warning(f"Scratch allocation of {dst_region.size} returned nothing")
        return OperationResult.failure(
            ErrorKind.RESOURCE_ALLOCATION_FAILED,
            f"could not allocate {src_w}x{src_h} scratch image",
        )

    try:
        try:
            baseline = dst_image.crop(dst_region.box).convert(SCRATCH_MODE)
            # baseline stays separate from scratch: it is the 0% end of the blend
            scratch.paste(baseline, (0, 0))
            patch = src_image.crop(src_region.box).convert(SCRATCH_MODE)
            scratch.alpha_composite(patch, (0, 0))
            merged = Image.blend(baseline, scratch, pct / BLEND_PCT_MAX)
            if merged.mode != dst_image.mode:
                merged = merged.convert(dst_image.mode)
        except (ValueError, OSError, MemoryError) as exc:
            return _copy_failed(f"could not merge into scratch image: {exc}")

        try:
            dst_image.paste(merged, (dst_x, dst_y))
        except (ValueError, OSError) as exc:
            return _copy_failed(
                f"could not copy scratch image back to ({dst_x}, {dst_y}): {exc}",
                destination_modified=True,
            )
    finally:
        scratch.close()

    return OperationResult.success()
