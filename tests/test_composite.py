"""
Tests for the alpha-preserving copy-merge.

Tests cover:
- Direct copy at 100 percent
- Blending through the scratch image
- Alpha preservation
- Region bounds checking
- Allocation and copy failures leaving the destination untouched
- Scratch image release
"""

import unittest
from unittest.mock import Mock, patch

from PIL import Image

from IE_Libs.ToolkitLib.composite import (
    create_scratch_image,
    image_copy,
    image_copy_merge_alpha,
)
from IE_Libs.ToolkitLib.errors import ErrorKind
from IE_Libs.ToolkitLib.image_models import Region


def _patterned(size, seed=0):
    img = Image.new("RGBA", size)
    pixels = img.load()
    width, height = size
    for y in range(height):
        for x in range(width):
            pixels[x, y] = ((x * 7 + seed) % 256, (y * 11 + seed) % 256, (x * y) % 256, 255 - x)
    return img


class TestFullOpacityCopy(unittest.TestCase):
    """Test the 100 percent direct copy."""

    def test_region_equals_source(self):
        """Destination region should equal the source region exactly."""
        dst = _patterned((30, 30))
        src = _patterned((20, 20), seed=90)

        result = image_copy_merge_alpha(dst, src, 8, 4, 3, 5, 12, 10, 100)

        self.assertTrue(result.ok)
        self.assertEqual(
            dst.crop((8, 4, 20, 14)).tobytes(),
            src.crop((3, 5, 15, 15)).tobytes(),
        )

    def test_pixels_outside_region_untouched(self):
        dst = Image.new("RGBA", (20, 20), "white")
        src = Image.new("RGBA", (10, 10), "blue")

        image_copy_merge_alpha(dst, src, 5, 5, 0, 0, 10, 10, 100)

        self.assertEqual(dst.getpixel((5, 5)), (0, 0, 255, 255))
        self.assertEqual(dst.getpixel((14, 14)), (0, 0, 255, 255))
        self.assertEqual(dst.getpixel((4, 4)), (255, 255, 255, 255))
        self.assertEqual(dst.getpixel((15, 15)), (255, 255, 255, 255))

    def test_copies_alpha_as_is(self):
        """Transparent source pixels replace destination pixels."""
        dst = Image.new("RGBA", (10, 10), (255, 0, 0, 255))
        src = Image.new("RGBA", (10, 10), (0, 0, 255, 40))

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 100)

        self.assertEqual(dst.getpixel((3, 3)), (0, 0, 255, 40))

    def test_self_copy_is_noop(self):
        """Copying an image onto itself at 100 leaves it bit-identical."""
        img = _patterned((25, 15))
        before = img.tobytes()

        result = image_copy_merge_alpha(img, img, 0, 0, 0, 0, 25, 15, 100)

        self.assertTrue(result.ok)
        self.assertEqual(img.tobytes(), before)

    def test_does_not_allocate_scratch(self):
        dst = Image.new("RGBA", (10, 10))
        src = Image.new("RGBA", (10, 10), "green")
        factory = Mock()

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 100, scratch_factory=factory)

        factory.assert_not_called()

    def test_image_copy_converts_mode(self):
        dst = Image.new("RGBA", (10, 10))
        src = Image.new("RGB", (10, 10), (1, 2, 3))

        result = image_copy(dst, src, 0, 0, Region(0, 0, 10, 10))

        self.assertTrue(result.ok)
        self.assertEqual(dst.getpixel((0, 0)), (1, 2, 3, 255))


class TestBlendedMerge(unittest.TestCase):
    """Test merging below 100 percent."""

    def test_red_green_half_blend(self):
        """Opaque red and green at 50 should give an even mix, still opaque."""
        dst = Image.new("RGBA", (40, 20), (255, 0, 0, 255))
        src = Image.new("RGBA", (40, 20), (0, 255, 0, 255))

        result = image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 40, 20, 50)

        self.assertTrue(result.ok)
        for point in [(0, 0), (39, 0), (0, 19), (39, 19), (20, 10)]:
            r, g, b, a = dst.getpixel(point)
            self.assertAlmostEqual(r, 128, delta=1)
            self.assertAlmostEqual(g, 128, delta=1)
            self.assertEqual(b, 0)
            self.assertEqual(a, 255)

    def test_zero_percent_leaves_destination(self):
        dst = _patterned((30, 30))
        src = Image.new("RGBA", (30, 30), (0, 0, 255, 255))
        before = dst.tobytes()

        result = image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 30, 30, 0)

        self.assertTrue(result.ok)
        self.assertEqual(dst.tobytes(), before)

    def test_transparent_source_leaves_destination(self):
        """A fully transparent source should not change the destination."""
        dst = Image.new("RGBA", (10, 10), (255, 0, 0, 255))
        src = Image.new("RGBA", (10, 10), (0, 255, 0, 0))

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50)

        self.assertEqual(dst.getpixel((5, 5)), (255, 0, 0, 255))

    def test_semi_transparent_source(self):
        """Source alpha should weigh in before the percentage blend."""
        dst = Image.new("RGBA", (10, 10), (255, 255, 255, 255))
        src = Image.new("RGBA", (10, 10), (0, 0, 0, 128))

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50)

        r, g, b, a = dst.getpixel((5, 5))
        # Composite gives ~127 grey, blended halfway with white gives ~191
        self.assertAlmostEqual(r, 191, delta=2)
        self.assertEqual(r, g)
        self.assertEqual(g, b)
        self.assertEqual(a, 255)

    def test_semi_transparent_destination_alpha(self):
        """Destination alpha should move toward the composite's alpha."""
        dst = Image.new("RGBA", (10, 10), (255, 0, 0, 128))
        src = Image.new("RGBA", (10, 10), (0, 255, 0, 255))

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50)

        alpha = dst.getpixel((5, 5))[3]
        self.assertGreaterEqual(alpha, 190)
        self.assertLessEqual(alpha, 192)

    def test_offset_region(self):
        dst = Image.new("RGBA", (20, 20), (255, 0, 0, 255))
        src = Image.new("RGBA", (10, 10), (0, 255, 0, 255))

        image_copy_merge_alpha(dst, src, 10, 10, 2, 2, 8, 8, 50)

        self.assertEqual(dst.getpixel((9, 9)), (255, 0, 0, 255))
        self.assertNotEqual(dst.getpixel((10, 10)), (255, 0, 0, 255))
        self.assertNotEqual(dst.getpixel((17, 17)), (255, 0, 0, 255))
        self.assertEqual(dst.getpixel((18, 18)), (255, 0, 0, 255))

    def test_keeps_destination_mode(self):
        dst = Image.new("RGB", (10, 10), (255, 0, 0))
        src = Image.new("RGBA", (10, 10), (0, 255, 0, 255))

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50)

        self.assertEqual(dst.mode, "RGB")
        r, g, b = dst.getpixel((0, 0))
        self.assertAlmostEqual(r, 128, delta=1)
        self.assertAlmostEqual(g, 128, delta=1)

    def test_scratch_sized_to_region(self):
        dst = Image.new("RGBA", (30, 30))
        src = Image.new("RGBA", (30, 30))
        sizes = []

        def factory(size):
            sizes.append(size)
            return create_scratch_image(size)

        image_copy_merge_alpha(dst, src, 1, 2, 3, 4, 12, 7, 30, scratch_factory=factory)

        self.assertEqual(sizes, [(12, 7)])

    def test_scratch_released(self):
        dst = Image.new("RGBA", (10, 10))
        src = Image.new("RGBA", (10, 10))
        scratch = create_scratch_image((10, 10))
        scratch.close = Mock()

        image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50,
                               scratch_factory=lambda size: scratch)

        scratch.close.assert_called_once()


class TestMergeFailures(unittest.TestCase):
    """Test failure reporting and destination integrity."""

    def setUp(self):
        self.dst = _patterned((40, 20))
        self.src = Image.new("RGBA", (40, 20), (0, 255, 0, 255))
        self.before = self.dst.tobytes()

    def test_allocation_failure(self):
        """Scratch allocation failure leaves the destination untouched."""
        def out_of_memory(size):
            raise MemoryError("simulated")

        result = image_copy_merge_alpha(
            self.dst, self.src, 0, 0, 0, 0, 40, 20, 50, scratch_factory=out_of_memory
        )

        self.assertFalse(result.ok)
        self.assertIs(result.kind, ErrorKind.RESOURCE_ALLOCATION_FAILED)
        self.assertEqual(self.dst.tobytes(), self.before)

    def test_allocation_returns_nothing(self):
        result = image_copy_merge_alpha(
            self.dst, self.src, 0, 0, 0, 0, 40, 20, 50, scratch_factory=lambda size: None
        )

        self.assertIs(result.kind, ErrorKind.RESOURCE_ALLOCATION_FAILED)
        self.assertEqual(self.dst.tobytes(), self.before)

    def test_scratch_copy_failure(self):
        """A failed copy into the scratch releases it and aborts."""
        scratch = Mock()
        scratch.paste.side_effect = ValueError("images do not match")

        result = image_copy_merge_alpha(
            self.dst, self.src, 0, 0, 0, 0, 40, 20, 50, scratch_factory=lambda size: scratch
        )

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)
        self.assertFalse(result.error.destination_modified)
        scratch.close.assert_called_once()
        self.assertEqual(self.dst.tobytes(), self.before)

    def test_copy_back_failure(self):
        """A failed copy-back is reported as indeterminate."""
        with patch.object(self.dst, "paste", side_effect=ValueError("simulated")):
            result = image_copy_merge_alpha(
                self.dst, self.src, 0, 0, 0, 0, 40, 20, 50
            )

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)
        self.assertTrue(result.error.destination_modified)

    def test_source_region_out_of_bounds(self):
        result = image_copy_merge_alpha(self.dst, self.src, 0, 0, 30, 0, 20, 20, 50)

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)
        self.assertEqual(self.dst.tobytes(), self.before)

    def test_destination_region_out_of_bounds(self):
        result = image_copy_merge_alpha(self.dst, self.src, 35, 15, 0, 0, 10, 10, 100)

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)
        self.assertEqual(self.dst.tobytes(), self.before)

    def test_palette_destination_refused(self):
        """A palette destination is refused at every percentage, untouched."""
        for pct in (50, 100):
            dst = Image.new("RGB", (10, 10), (255, 0, 0)).convert(
                "P", palette=Image.Palette.ADAPTIVE, colors=4
            )
            before = dst.tobytes()
            factory = Mock()

            result = image_copy_merge_alpha(
                dst, self.src, 0, 0, 0, 0, 10, 10, pct, scratch_factory=factory
            )

            self.assertFalse(result.ok)
            self.assertIs(result.kind, ErrorKind.COPY_FAILED)
            self.assertFalse(result.error.destination_modified)
            self.assertEqual(dst.tobytes(), before)
            factory.assert_not_called()

    def test_image_copy_refuses_palette_destination(self):
        dst = Image.new("P", (10, 10))
        before = dst.tobytes()

        result = image_copy(dst, self.src, 0, 0, Region(0, 0, 10, 10))

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)
        self.assertEqual(dst.tobytes(), before)

    def test_palette_source_is_merged(self):
        """Palette images are still accepted as the source."""
        dst = Image.new("RGBA", (10, 10), (255, 0, 0, 255))
        src = Image.new("RGB", (10, 10), (0, 255, 0)).convert("P")

        result = image_copy_merge_alpha(dst, src, 0, 0, 0, 0, 10, 10, 50)

        self.assertTrue(result.ok)
        r, g, b, a = dst.getpixel((5, 5))
        self.assertAlmostEqual(r, 128, delta=1)
        self.assertAlmostEqual(g, 128, delta=1)

    def test_empty_region(self):
        result = image_copy_merge_alpha(self.dst, self.src, 0, 0, 0, 0, 0, 10, 50)

        self.assertIs(result.kind, ErrorKind.COPY_FAILED)

    def test_invalid_pct(self):
        for pct in (-1, 101, 50.0, True, "50"):
            with self.assertRaises(ValueError):
                image_copy_merge_alpha(self.dst, self.src, 0, 0, 0, 0, 10, 10, pct)

    def test_invalid_images(self):
        with self.assertRaises(TypeError):
            image_copy_merge_alpha("not_an_image", self.src, 0, 0, 0, 0, 10, 10, 50)
        with self.assertRaises(TypeError):
            image_copy_merge_alpha(self.dst, None, 0, 0, 0, 0, 10, 10, 50)


class TestRegion(unittest.TestCase):
    """Test Region bounds helpers."""

    def test_box(self):
        self.assertEqual(Region(2, 3, 10, 5).box, (2, 3, 12, 8))

    def test_fits_within(self):
        self.assertTrue(Region(0, 0, 40, 20).fits_within((40, 20)))
        self.assertFalse(Region(1, 0, 40, 20).fits_within((40, 20)))
        self.assertFalse(Region(-1, 0, 5, 5).fits_within((40, 20)))
        self.assertFalse(Region(0, 0, 0, 5).fits_within((40, 20)))


if __name__ == "__main__":
    unittest.main()
