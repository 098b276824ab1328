import unittest

from bankroll_sim.utils.numbers import abbreviate


class AbbreviateTests(unittest.TestCase):
    def test_thousands(self) -> None:
        self.assertEqual(abbreviate(11153.23, 4), "11.15k")
        self.assertEqual(abbreviate(11153.23, 3), "11.2k")

    def test_larger_suffixes(self) -> None:
        self.assertEqual(abbreviate(2_500_000, 3), "2.50m")
        self.assertEqual(abbreviate(7_200_000_000, 2), "7.2b")
        self.assertEqual(abbreviate(3_000_000_000_000.5, 1), "3t")

    def test_small_values_keep_significant_digits(self) -> None:
        self.assertEqual(abbreviate(1.2, 4), "1.200")
        self.assertEqual(abbreviate(0.05, 2), "0.0500")

    def test_zero(self) -> None:
        self.assertEqual(abbreviate(0.0), "0")

    def test_negative_and_non_finite(self) -> None:
        self.assertEqual(abbreviate(-1500, 2), "-1.5k")
        self.assertEqual(abbreviate(float("nan")), "nan")
        self.assertEqual(abbreviate(float("inf")), "inf")


if __name__ == "__main__":
    unittest.main()
