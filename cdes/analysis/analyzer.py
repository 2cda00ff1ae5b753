"""
Configured profile analyzer.

Bundles the comparison, ranking, classification and scoring operations
behind one object whose defaults come from a ConfigManager, so callers
tune ranking from YAML instead of passing arguments at every call site.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from cdes.analysis.classifier import classify
from cdes.analysis.completeness import score_completeness
from cdes.analysis.distance import compare_profiles
from cdes.analysis.diversity import score_diversity
from cdes.analysis.ranking import find_similar, find_within_distance
from cdes.models import (
    Classification,
    ComparisonResult,
    CompletenessScore,
    DiversityScore,
    Profile,
    RankedResult,
)
from cdes.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)


class ProfileAnalyzer:
    """
    Compare, rank, classify and score cannabinoid profiles.

    Ranking limits, the similarity cut-off, the distance threshold, the
    similarity decay scale and the completeness bonuses are read from the
    configuration once, at construction.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        """
        Initialize the analyzer.

        Args:
            config: ConfigManager (loads cdes/config/analysis_config.yaml if None)
        """
        self.config = config or ConfigManager.from_default_path()

        self.limit = int(self.config.get_ranking_param('limit'))
        self.min_similarity = float(self.config.get_ranking_param('min_similarity'))
        self.distance_threshold = float(self.config.get_ranking_param('distance_threshold'))
        self.decay_scale = float(self.config.get_ranking_param('decay_scale'))
        self.bonus_key_count = int(self.config.get_completeness_param('bonus_key_count'))
        self.bonus_total = float(self.config.get_completeness_param('bonus_total'))

        logger.debug(
            "ProfileAnalyzer: limit=%d min_similarity=%.1f decay_scale=%.1f",
            self.limit, self.min_similarity, self.decay_scale,
        )

    def compare(self, a: Profile, b: Profile) -> ComparisonResult:
        return compare_profiles(a, b, decay_scale=self.decay_scale)

    def find_similar(
        self,
        target: Profile,
        candidates: Iterable[Profile],
        limit: Optional[int] = None,
        min_similarity: Optional[float] = None,
    ) -> List[RankedResult]:
        """
        Rank candidates against a target using configured defaults.

        Args:
            target: Profile to match against
            candidates: Profiles to rank
            limit: Override of the configured limit
            min_similarity: Override of the configured cut-off

        Returns:
            Ranked results, rank 1 = most similar
        """
        return find_similar(
            target,
            candidates,
            limit=self.limit if limit is None else limit,
            min_similarity=self.min_similarity if min_similarity is None else min_similarity,
            decay_scale=self.decay_scale,
        )

    def find_within_distance(
        self,
        target: Profile,
        candidates: Iterable[Profile],
        threshold: Optional[float] = None,
    ) -> List[Tuple[str, float]]:
        return find_within_distance(
            target,
            candidates,
            threshold=self.distance_threshold if threshold is None else threshold,
        )

    def classify(self, profile: Profile) -> Classification:
        return classify(profile)

    def score_completeness(self, profile: Profile) -> CompletenessScore:
        return score_completeness(
            profile,
            bonus_key_count=self.bonus_key_count,
            bonus_total=self.bonus_total,
        )

    def score_diversity(self, profile: Profile) -> DiversityScore:
        return score_diversity(profile)
