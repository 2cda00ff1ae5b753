"""
Data structures for cannabinoid profiles and analysis results.

Defines the canonical per-batch profile produced by the parsers and the
result objects returned by the comparison, ranking, classification and
scoring operations.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

PARSE_MODES = ('long', 'wide', 'unknown')


@dataclass(frozen=True)
class Profile:
    """
    Canonical cannabinoid profile for one batch.

    Attributes:
        batch_id: Stable identifier of the source batch
        batch_name: Display label (defaults to batch_id)
        measurements: Canonical compound code -> percentage (read-only view)
        total: Sum of all measurement values
    """
    batch_id: str
    batch_name: str = ''
    measurements: Mapping[str, float] = field(default_factory=dict)
    total: float = field(init=False)

    def __post_init__(self):
        """Freeze measurements and derive the total."""
        if not self.batch_name:
            object.__setattr__(self, 'batch_name', self.batch_id)
        frozen = MappingProxyType(dict(self.measurements))
        object.__setattr__(self, 'measurements', frozen)
        object.__setattr__(self, 'total', sum(frozen.values()))

    @property
    def compound_count(self) -> int:
        """Number of compounds reported for this batch."""
        return len(self.measurements)

    def get(self, code: str) -> float:
        """Get a compound percentage, or 0.0 if not reported."""
        return self.measurements.get(code, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "batch_id": self.batch_id,
            "batch_name": self.batch_name,
            "measurements": dict(self.measurements),
            "total": self.total,
        }


@dataclass(frozen=True)
class ParseResult:
    """
    Output of the tabular format parser.

    Attributes:
        profiles: Profiles in first-seen batch order
        mode: Structural interpretation that succeeded ('long', 'wide', 'unknown')
        records_processed: Raw input rows walked (not profiles produced)
    """
    profiles: List[Profile] = field(default_factory=list)
    mode: str = 'unknown'
    records_processed: int = 0

    def __post_init__(self):
        """Validate the parse mode."""
        if self.mode not in PARSE_MODES:
            raise ValueError(f"Invalid mode '{self.mode}', must be one of {PARSE_MODES}")

    @property
    def is_empty(self) -> bool:
        return not self.profiles

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "profiles": [p.to_dict() for p in self.profiles],
            "mode": self.mode,
            "records_processed": self.records_processed,
        }


@dataclass(frozen=True)
class CompoundDelta:
    """Per-compound difference between two profiles."""
    val1: float
    val2: float
    delta: float

    def to_dict(self) -> Dict[str, float]:
        return {"val1": self.val1, "val2": self.val2, "delta": self.delta}


@dataclass(frozen=True)
class ComparisonResult:
    """
    Pairwise comparison of two profiles.

    Attributes:
        profile1: First profile
        profile2: Second profile
        distance: Euclidean distance over the compound union
        similarity: Similarity score [0, 100], higher is more similar
        differences: Compounds whose values differ, keyed by code
    """
    profile1: Profile
    profile2: Profile
    distance: float
    similarity: float
    differences: Dict[str, CompoundDelta] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "profile1": self.profile1.to_dict(),
            "profile2": self.profile2.to_dict(),
            "distance": self.distance,
            "similarity": self.similarity,
            "differences": {k: d.to_dict() for k, d in self.differences.items()},
        }


@dataclass(frozen=True)
class RankedResult:
    """A candidate profile ranked against a target."""
    profile: Profile
    distance: float
    similarity: float
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "distance": self.distance,
            "similarity": self.similarity,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class Classification:
    """
    Dominance type and content buckets for a profile.

    Attributes:
        type: 'THC-Dominant', 'CBD-Dominant', 'Balanced' or 'Unknown'
        thc_content: 'High', 'Moderate', 'Low' or 'Trace'
        cbd_content: 'High', 'Moderate', 'Low' or 'Trace'
        ratio: Human-readable THC/CBD ratio (e.g. '1.3:1 THC:CBD')
    """
    type: str
    thc_content: str
    cbd_content: str
    ratio: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type,
            "thc_content": self.thc_content,
            "cbd_content": self.cbd_content,
            "ratio": self.ratio,
        }


@dataclass(frozen=True)
class CompletenessScore:
    """Completeness rating of a profile against the known compounds."""
    score: float
    coverage: float
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "coverage": self.coverage, "message": self.message}


@dataclass(frozen=True)
class DiversityScore:
    """Compound diversity rating of a profile."""
    score: float
    profile: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "profile": self.profile, "description": self.description}


@dataclass
class Column:
    """One column of tabular input, aligned with its siblings by row index."""
    values: List[Any] = field(default_factory=list)
    display_name: Optional[str] = None


@dataclass
class TabularInput:
    """
    Ambiguous structured input for the format parser.

    Attributes:
        categories: Category columns (batch ids, compound labels)
        values: Value columns (percentages)
    """
    categories: List[Column] = field(default_factory=list)
    values: List[Column] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Length of the first category column (0 if none)."""
        return len(self.categories[0].values) if self.categories else 0
