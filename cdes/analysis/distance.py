"""
Profile distance and similarity.

Profiles are compared as sparse vectors over the union of their compound
codes; a compound missing from one profile counts as 0. Euclidean
distance is mapped onto a bounded [0, 100] similarity by exponential
decay:

    similarity = 100 * exp(-distance / 10)
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, List, Mapping

from cdes.models import ComparisonResult, CompoundDelta, Profile

# Distance at which similarity has decayed to 100/e
DECAY_SCALE = 10.0

MAX_SIMILARITY = 100.0

# Magnitudes from here up are formatted directly, without Decimal rounding
FIXED_NOTATION_LIMIT = 1e21

_FIXED_CONTEXT = Context(prec=128)


def _key_union(a: Mapping[str, float], b: Mapping[str, float]) -> List[str]:
    keys = list(a)
    keys.extend(k for k in b if k not in a)
    return keys


def euclidean_distance(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """
    Euclidean distance between two measurement mappings.

    Args:
        a: Compound code -> percentage
        b: Compound code -> percentage

    Returns:
        Square root of the summed squared differences over the key union
    """
    total = 0.0
    for key in _key_union(a, b):
        diff = a.get(key, 0.0) - b.get(key, 0.0)
        total += diff * diff
    return math.sqrt(total)


def profile_distance(a: Profile, b: Profile) -> float:
    """Euclidean distance between two profiles' measurements."""
    return euclidean_distance(a.measurements, b.measurements)


def similarity_from_distance(distance: float, decay_scale: float = DECAY_SCALE) -> float:
    """
    Map a distance onto a [0, 100] similarity score.

    Examples:
        >>> similarity_from_distance(0)
        100.0
        >>> round(similarity_from_distance(10), 2)
        36.79
    """
    score = MAX_SIMILARITY * math.exp(-distance / decay_scale)
    return max(0.0, min(MAX_SIMILARITY, score))


def measurement_differences(a: Profile, b: Profile) -> Dict[str, CompoundDelta]:
    """
    Per-compound differences between two profiles.

    Only compounds whose values are not exactly equal are included.
    """
    differences: Dict[str, CompoundDelta] = {}
    for key in _key_union(a.measurements, b.measurements):
        val1 = a.get(key)
        val2 = b.get(key)
        if val1 != val2:
            differences[key] = CompoundDelta(val1=val1, val2=val2, delta=val2 - val1)
    return differences


def compare_profiles(a: Profile, b: Profile, decay_scale: float = DECAY_SCALE) -> ComparisonResult:
    """
    Compare two profiles.

    Args:
        a: First profile
        b: Second profile
        decay_scale: Distance scale of the similarity decay

    Returns:
        ComparisonResult with distance, similarity and per-compound deltas
    """
    distance = profile_distance(a, b)
    return ComparisonResult(
        profile1=a,
        profile2=b,
        distance=distance,
        similarity=similarity_from_distance(distance, decay_scale),
        differences=measurement_differences(a, b),
    )


def calculate_total(measurements: Mapping[str, float]) -> float:
    """Sum of all measurement values."""
    return sum(measurements.values())


def format_value(value: float, decimals: int = 2) -> str:
    """
    Format a percentage for display.

    Examples:
        >>> format_value(20)
        '20.00%'
        >>> format_value(0.456, 1)
        '0.5%'
    """
    return f"{to_fixed(value, decimals)}%"


def to_fixed(value: float, decimals: int) -> str:
    """
    Fixed-point text for a float, rounding ties away from zero.

    The exact binary value is rounded, so 1.25 becomes '1.3' while 1.005
    (stored as 1.00499...) becomes '1.00' at two places.

    Examples:
        >>> to_fixed(1.25, 1)
        '1.3'
        >>> to_fixed(12.25, 1)
        '12.3'
        >>> to_fixed(1.005, 2)
        '1.00'
    """
    if not math.isfinite(value) or abs(value) >= FIXED_NOTATION_LIMIT:
        return f"{value:.{decimals}f}"
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT)
    return format(rounded, "f")
