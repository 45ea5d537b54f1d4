"""
Perceptual color difference for paint matching.

Uses CIE76 Delta E: plain Euclidean distance in L*a*b*, with no weighting.
"""

import math
from enum import Enum
from typing import Tuple

import numpy as np

Lab = Tuple[float, float, float]


class MatchBand(Enum):
    """Qualitative label for a Delta E value, used by presentation layers."""
    PERFECT = "Perfect"
    CLOSE = "Close"
    SIMILAR = "Similar"
    DISTANT = "Distant"


def delta_e_76(lab1: Lab, lab2: Lab) -> float:
    """Calculate CIE76 Delta E between two L*a*b* colors.

    Args:
        lab1: First Lab color (L, a, b)
        lab2: Second Lab color (L, a, b)

    Returns:
        Non-negative distance, 0.0 only for identical colors
    """
    l1, a1, b1 = lab1
    l2, a2, b2 = lab2

    delta_l = l1 - l2
    delta_a = a1 - a2
    delta_b = b1 - b2

    return math.sqrt(delta_l**2 + delta_a**2 + delta_b**2)


def delta_e_76_many(target_lab: Lab, labs) -> np.ndarray:
    """Calculate CIE76 Delta E from one color to each row of an (N, 3) array."""
    labs = np.asarray(labs, dtype=float).reshape(-1, 3)
    diff = labs - np.asarray(target_lab, dtype=float)
    return np.sqrt(np.sum(diff ** 2, axis=1))


def match_band(distance: float) -> MatchBand:
    """Label a Delta E value: <5 Perfect, <10 Close, <20 Similar, else Distant."""
    if distance < 5:
        return MatchBand.PERFECT
    elif distance < 10:
        return MatchBand.CLOSE
    elif distance < 20:
        return MatchBand.SIMILAR
    return MatchBand.DISTANT


def delta_e_to_similarity(distance: float) -> float:
    """Convert Delta E to a 0-100 similarity percentage.

    Delta E values:
    - 0-1: Not perceptible by human eyes
    - 1-2: Perceptible through close observation
    - 2-10: Perceptible at a glance
    - 11-49: Colors are more similar than opposite
    - 50+: Colors are very different
    """
    if distance < 0:
        raise ValueError(f"Delta E cannot be negative, got {distance}")
    if distance == 0:
        return 100.0
    if distance <= 1:
        return 99.0
    if distance <= 2:
        return 95.0
    if distance <= 5:
        return 90.0
    if distance <= 10:
        return 80.0
    if distance <= 20:
        return 60.0
    if distance <= 30:
        return 40.0
    if distance <= 40:
        return 20.0
    return max(0.0, 10 - (distance - 40) / 5)
