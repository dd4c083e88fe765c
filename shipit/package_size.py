"""
Package size classification.

Shipit groups packages into four size bands by their largest side, in cm.
"""
from typing import Tuple

VERY_LARGE_LABEL = "Very Large (>60x60x60cm)"

# (upper bound in cm, label), ascending
PACKAGE_SIZES: Tuple[Tuple[float, str], ...] = (
    (29, "Small (10x10x10cm)"),
    (49, "Medium (30x30x30cm)"),
    (60, "Large (50x50x50cm)"),
    (float("inf"), VERY_LARGE_LABEL),
)


def classify_package_size(width: float, height: float, length: float) -> str:
    """Return the size label for a package with the given dimensions."""
    largest = max(width, height, length)

    for limit, label in PACKAGE_SIZES:
        if largest <= limit:
            return label

    # Only reachable for NaN dimensions
    return VERY_LARGE_LABEL
