"""
CDES Profile Toolkit - Source Package

Normalizes cannabinoid lab measurements into per-batch profiles and
compares, ranks, classifies and scores them.

Main modules:
- normalization: Compound label resolution and value coercion
- extraction: Layout detection and parsing (BI datasets, DataFrames, records)
- analysis: Distance, similarity ranking, classification and scoring
- utils: YAML configuration
"""

from cdes.analysis import (
    ProfileAnalyzer,
    classify,
    compare_profiles,
    find_similar,
    find_within_distance,
    score_completeness,
    score_diversity,
)
from cdes.extraction import (
    load_table,
    parse_dataframe,
    parse_file,
    parse_record,
    parse_records,
    parse_tabular,
)
from cdes.models import (
    Classification,
    Column,
    ComparisonResult,
    CompletenessScore,
    CompoundDelta,
    DiversityScore,
    ParseResult,
    Profile,
    RankedResult,
    TabularInput,
)
from cdes.normalization import KNOWN_COMPOUNDS, NameResolver, resolve_canonical_name

__version__ = "1.2.0"

compare = compare_profiles
score_profile_completeness = score_completeness

__all__ = [
    "KNOWN_COMPOUNDS",
    "Classification",
    "Column",
    "ComparisonResult",
    "CompletenessScore",
    "CompoundDelta",
    "DiversityScore",
    "NameResolver",
    "ParseResult",
    "Profile",
    "ProfileAnalyzer",
    "RankedResult",
    "TabularInput",
    "classify",
    "compare",
    "compare_profiles",
    "find_similar",
    "find_within_distance",
    "load_table",
    "parse_dataframe",
    "parse_file",
    "parse_record",
    "parse_records",
    "parse_tabular",
    "resolve_canonical_name",
    "score_completeness",
    "score_diversity",
    "score_profile_completeness",
]
