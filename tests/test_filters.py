import unittest

import numpy as np

from image_filters.core import Pixel, PixelBuffer, filters
from .helpers import create_random_buffer, create_uniform_buffer


class TestSingleImageFilters(unittest.TestCase):
    def setUp(self) -> None:
        self.buffer = create_random_buffer()
        self.source = self.buffer.pixels.astype(np.int32)

        self.sample = create_uniform_buffer(30, 40, (0, 0, 0))
        self.sample.set_pixel(10, 20, (200, 50, 100))

    def test_greyscale_sets_every_channel_to_floored_mean(self) -> None:
        result = filters.greyscale(self.buffer).pixels.astype(np.int32)
        expected = self.source.sum(axis=2) // 3
        for channel in range(3):
            self.assertTrue(np.array_equal(result[..., channel], expected))

    def test_invert_is_absolute_difference_from_255(self) -> None:
        result = filters.invert(self.buffer).pixels.astype(np.int32)
        self.assertTrue(np.array_equal(result, np.abs(self.source - 255)))

    def test_invert_twice_restores_original(self) -> None:
        self.assertEqual(filters.invert(filters.invert(self.buffer)), self.buffer)

    def test_only_channel_filters_zero_the_other_channels(self) -> None:
        cases = {
            filters.only_red: 0,
            filters.only_green: 1,
            filters.only_blue: 2,
        }
        for transform, kept in cases.items():
            with self.subTest(filter=transform.__name__):
                result = transform(self.buffer).pixels
                self.assertTrue(np.array_equal(result[..., kept], self.source[..., kept]))
                for channel in {0, 1, 2} - {kept}:
                    self.assertFalse(result[..., channel].any())

    def test_posterize_keeps_only_strict_maximum(self) -> None:
        result = filters.posterize(self.buffer).pixels
        for y in range(self.buffer.height):
            for x in range(self.buffer.width):
                before = self.source[y, x].tolist()
                after = result[y, x].tolist()
                top = max(before)
                if before.count(top) > 1:
                    self.assertEqual(after, before)
                else:
                    winner = before.index(top)
                    expected = [0, 0, 0]
                    expected[winner] = top
                    self.assertEqual(after, expected)

    def test_posterize_leaves_ties_untouched(self) -> None:
        buffer = PixelBuffer(
            np.array([[[90, 90, 90], [200, 200, 10], [5, 120, 120], [7, 3, 7]]], dtype=np.uint8)
        )
        result = filters.posterize(buffer)
        self.assertEqual(result, buffer)

    def test_reference_pixel_scenarios(self) -> None:
        self.assertEqual(filters.greyscale(self.sample).get_pixel(10, 20), Pixel(116, 116, 116))
        self.assertEqual(filters.invert(self.sample).get_pixel(10, 20), Pixel(55, 205, 155))
        self.assertEqual(filters.posterize(self.sample).get_pixel(10, 20), Pixel(200, 0, 0))

    def test_filters_do_not_mutate_input(self) -> None:
        snapshot = self.buffer.pixels.copy()
        for name, transform in filters.FILTERS.items():
            with self.subTest(filter=name):
                result = transform(self.buffer)
                self.assertIsNot(result, self.buffer)
                self.assertTrue(np.array_equal(self.buffer.pixels, snapshot))

    def test_filter_registry_order(self) -> None:
        self.assertEqual(
            list(filters.FILTERS),
            ["greyscale", "invert", "only_red", "only_blue", "only_green", "posterize"],
        )


class TestWatermark(unittest.TestCase):
    def test_blends_smaller_image_over_corner(self) -> None:
        first = create_uniform_buffer(4, 4, (100, 100, 100))
        second = create_uniform_buffer(2, 2, (200, 0, 0))

        result = filters.watermark(first, second)

        for y in range(4):
            for x in range(4):
                expected = Pixel(150, 50, 50) if x < 2 and y < 2 else Pixel(100, 100, 100)
                self.assertEqual(result.get_pixel(x, y), expected, f"pixel ({x}, {y})")
        self.assertEqual(first.get_pixel(0, 0), Pixel(100, 100, 100))
        self.assertEqual(second.get_pixel(0, 0), Pixel(200, 0, 0))

    def test_average_is_floored(self) -> None:
        first = create_uniform_buffer(2, 2, (255, 0, 3))
        second = create_uniform_buffer(2, 2, (0, 1, 4))
        self.assertEqual(filters.watermark(first, second).get_pixel(1, 1), Pixel(127, 0, 3))

    def test_area_region_uses_second_dimensions_when_first_is_larger(self) -> None:
        first = create_uniform_buffer(6, 5, (0, 0, 0))
        second = create_uniform_buffer(3, 2, (0, 0, 0))
        self.assertEqual(filters.watermark_region(first, second, "area"), (3, 2))
        self.assertEqual(filters.watermark_region(second, first, "area"), (3, 2))

    def test_area_region_on_equal_area_uses_first_dimensions(self) -> None:
        first = create_uniform_buffer(2, 6, (0, 0, 0))
        second = create_uniform_buffer(6, 2, (0, 0, 0))
        self.assertEqual(filters.watermark_region(first, second, "area"), (2, 6))
        with self.assertRaises(IndexError):
            filters.watermark(first, second, bounds="area")

    def test_area_mode_faults_when_smaller_area_is_wider(self) -> None:
        first = create_uniform_buffer(4, 10, (10, 10, 10))
        second = create_uniform_buffer(6, 2, (30, 30, 30))
        with self.assertRaises(IndexError):
            filters.watermark(first, second)

    def test_overlap_mode_blends_per_dimension_minimum(self) -> None:
        first = create_uniform_buffer(4, 10, (10, 10, 10))
        second = create_uniform_buffer(6, 2, (30, 30, 30))

        self.assertEqual(filters.watermark_region(first, second, "overlap"), (4, 2))
        result = filters.watermark(first, second, bounds="overlap")
        self.assertEqual(result.get_pixel(3, 1), Pixel(20, 20, 20))
        self.assertEqual(result.get_pixel(3, 2), Pixel(10, 10, 10))
        self.assertEqual((result.width, result.height), (4, 10))

    def test_unknown_bounds_mode(self) -> None:
        buffer = create_uniform_buffer(2, 2, (0, 0, 0))
        with self.assertRaises(ValueError):
            filters.watermark(buffer, buffer, bounds="diagonal")


if __name__ == "__main__":
    unittest.main()
