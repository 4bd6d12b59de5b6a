import unittest

import numpy as np

from tumhet.data import ModeledSegment, PosteriorSummary, TumorHeterogeneityData

from tumhet.tests.mocks import get_data


class TestPosteriorSummary(unittest.TestCase):

    def test_deciles_are_optional(self):
        summary = PosteriorSummary(0.0, -0.1, 0.1)

        self.assertIsNone(summary.deciles)

        deciles = tuple(np.linspace(-0.1, 0.1, 11))

        summary = PosteriorSummary(0.0, -0.1, 0.1, deciles=deciles)

        self.assertEqual(summary.deciles, deciles)

        self.assertEqual(summary[:3], (0.0, -0.1, 0.1))


class TestModeledSegment(unittest.TestCase):

    def test_length_is_inclusive(self):
        self.assertEqual(ModeledSegment('1', 1, 25).length, 25)

        self.assertEqual(ModeledSegment('1', 26, 100).length, 75)

        self.assertEqual(ModeledSegment('X', 10, 10).length, 1)

    def test_invalid_coordinates(self):
        for start, end in [(0, 10), (10, 9), (1.5, 10)]:
            with self.assertRaises(ValueError):
                ModeledSegment('1', start, end)


class TestTumorHeterogeneityData(unittest.TestCase):

    def test_lengths(self):
        data = get_data()

        self.assertEqual(data.num_segments, 2)

        self.assertEqual(data.total_length, 100)

        self.assertEqual(data.get_length(0), 25)

        self.assertEqual(data.get_length(1), 75)

        self.assertEqual(data[1].start, 26)

    def test_fractional_lengths_are_exact(self):
        data = TumorHeterogeneityData([
            ModeledSegment('1', 1, 1),
            ModeledSegment('1', 2, 3),
            ModeledSegment('2', 1, 3000000000)
        ])

        total = 1 + 2 + 3000000000

        self.assertEqual(data.calculate_fractional_length(0), 1 / total)

        self.assertEqual(data.calculate_fractional_length(2), 3000000000 / total)

        np.testing.assert_array_equal(data.fractional_lengths, [1 / total, 2 / total, 3000000000 / total])

        self.assertAlmostEqual(np.sum(data.fractional_lengths), 1.0)

    def test_out_of_range(self):
        data = get_data()

        for idx in [-1, 2]:
            with self.assertRaises(IndexError):
                data.calculate_fractional_length(idx)

            with self.assertRaises(IndexError):
                data.get_length(idx)

    def test_empty(self):
        with self.assertRaises(ValueError):
            TumorHeterogeneityData([])

    def test_non_segments(self):
        with self.assertRaises(ValueError):
            TumorHeterogeneityData([('1', 1, 25)])


if __name__ == "__main__":
    unittest.main()
