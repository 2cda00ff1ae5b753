"""
Strain classification by THC/CBD content.

Derives a dominance type, content-level buckets and a display ratio from
a profile's THC and CBD percentages. All thresholds are strict: a value
sitting exactly on a boundary falls into the lower bucket, and THC at
exactly twice CBD is Balanced, not THC-Dominant.
"""

from typing import Sequence, Tuple

from cdes.analysis.distance import to_fixed
from cdes.models import Classification, Profile

THC_DOMINANT = 'THC-Dominant'
CBD_DOMINANT = 'CBD-Dominant'
BALANCED = 'Balanced'
UNKNOWN = 'Unknown'

# Compound must exceed this multiple of the other to dominate
DOMINANCE_FACTOR = 2

# (lower bound, label), checked in order; below all bounds -> 'Trace'
THC_LEVELS: Tuple[Tuple[float, str], ...] = ((20, 'High'), (10, 'Moderate'), (0.5, 'Low'))
CBD_LEVELS: Tuple[Tuple[float, str], ...] = ((15, 'High'), (7, 'Moderate'), (0.5, 'Low'))
TRACE = 'Trace'


def content_level(value: float, levels: Sequence[Tuple[float, str]]) -> str:
    """Bucket a percentage against descending (bound, label) levels."""
    for bound, label in levels:
        if value > bound:
            return label
    return TRACE


def dominance_type(thc: float, cbd: float) -> str:
    if thc > cbd * DOMINANCE_FACTOR:
        return THC_DOMINANT
    if cbd > thc * DOMINANCE_FACTOR:
        return CBD_DOMINANT
    if thc > 0 or cbd > 0:
        return BALANCED
    return UNKNOWN


def format_ratio(thc: float, cbd: float) -> str:
    """
    Format the THC/CBD ratio for display, one decimal place, ties rounded up.

    Examples:
        >>> format_ratio(20, 15)
        '1.3:1 THC:CBD'
        >>> format_ratio(5, 10)
        '2.0:1 CBD:THC'
        >>> format_ratio(25, 20)
        '1.3:1 THC:CBD'
        >>> format_ratio(12.25, 0)
        '12.3% THC'
        >>> format_ratio(0, 0)
        'N/A'
    """
    if thc > 0 and cbd > 0:
        parts = max(thc, cbd) / min(thc, cbd)
        if thc > cbd:
            return f"{to_fixed(parts, 1)}:1 THC:CBD"
        return f"{to_fixed(parts, 1)}:1 CBD:THC"
    if thc > 0:
        return f"{to_fixed(thc, 1)}% THC"
    if cbd > 0:
        return f"{to_fixed(cbd, 1)}% CBD"
    return 'N/A'


def classify(profile: Profile) -> Classification:
    """
    Classify a profile by THC/CBD content.

    Args:
        profile: Profile to classify

    Returns:
        Classification with type, thc_content, cbd_content and ratio
    """
    thc = profile.get('THC')
    cbd = profile.get('CBD')

    return Classification(
        type=dominance_type(thc, cbd),
        thc_content=content_level(thc, THC_LEVELS),
        cbd_content=content_level(cbd, CBD_LEVELS),
        ratio=format_ratio(thc, cbd),
    )
