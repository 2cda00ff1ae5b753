"""
Profile analysis package.

Provides comparison and ranking of cannabinoid profiles using:
- Euclidean distance over the union of compound codes
- Exponential-decay similarity bounded to [0, 100]
- THC/CBD dominance classification
- Completeness and diversity scoring

ProfileAnalyzer wires these together with YAML-configured defaults.
"""

from cdes.analysis.analyzer import ProfileAnalyzer
from cdes.analysis.classifier import classify
from cdes.analysis.completeness import score_completeness
from cdes.analysis.distance import (
    calculate_total,
    compare_profiles,
    euclidean_distance,
    format_value,
    profile_distance,
    similarity_from_distance,
    to_fixed,
)
from cdes.analysis.diversity import score_diversity
from cdes.analysis.ranking import find_similar, find_within_distance

__all__ = [
    "ProfileAnalyzer",
    "calculate_total",
    "classify",
    "compare_profiles",
    "euclidean_distance",
    "find_similar",
    "find_within_distance",
    "format_value",
    "profile_distance",
    "score_completeness",
    "score_diversity",
    "similarity_from_distance",
    "to_fixed",
]
