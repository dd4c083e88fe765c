"""
Tests for package size classification.
"""
import pytest

from shipit.package_size import PACKAGE_SIZES, VERY_LARGE_LABEL, classify_package_size

SMALL = "Small (10x10x10cm)"
MEDIUM = "Medium (30x30x30cm)"
LARGE = "Large (50x50x50cm)"


class TestClassifyPackageSize:
    """Size bands are chosen by the largest side."""

    def test_small_cube(self):
        assert classify_package_size(10, 10, 10) == SMALL

    @pytest.mark.parametrize("dims, expected", [
        ((0, 0, 0), SMALL),
        ((29, 1, 1), SMALL),
        ((1, 29, 29), SMALL),
        ((29.5, 1, 1), MEDIUM),
        ((30, 30, 30), MEDIUM),
        ((1, 1, 49), MEDIUM),
        ((49.01, 10, 10), LARGE),
        ((50, 50, 50), LARGE),
        ((10, 60, 10), LARGE),
        ((60.5, 1, 1), VERY_LARGE_LABEL),
        ((61, 61, 61), VERY_LARGE_LABEL),
        ((1, 1, 10_000_000), VERY_LARGE_LABEL),
    ])
    def test_band_boundaries(self, dims, expected):
        assert classify_package_size(*dims) == expected

    def test_uses_largest_dimension_regardless_of_position(self):
        assert classify_package_size(55, 5, 5) == classify_package_size(5, 5, 55) == LARGE

    def test_nan_falls_back_to_very_large(self):
        assert classify_package_size(float("nan"), 1, 1) == VERY_LARGE_LABEL

    def test_thresholds_ascending(self):
        limits = [limit for limit, _ in PACKAGE_SIZES]
        assert limits == sorted(limits)
        assert PACKAGE_SIZES[-1][1] == VERY_LARGE_LABEL
