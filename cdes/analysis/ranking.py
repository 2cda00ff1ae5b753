"""
Similarity ranking of candidate profiles against a target.
"""

import logging
from typing import Iterable, List, Tuple

from cdes.analysis.distance import DECAY_SCALE, profile_distance, similarity_from_distance
from cdes.models import Profile, RankedResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_MIN_SIMILARITY = 50.0
DEFAULT_DISTANCE_THRESHOLD = 5.0


def find_similar(
    target: Profile,
    candidates: Iterable[Profile],
    limit: int = DEFAULT_LIMIT,
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    decay_scale: float = DECAY_SCALE,
) -> List[RankedResult]:
    """
    Rank candidate profiles by similarity to a target.

    Candidates sharing the target's batch_id are excluded, as are those
    scoring below ``min_similarity``. Ties keep their input order.

    Args:
        target: Profile to match against
        candidates: Profiles to rank (may include the target)
        limit: Maximum number of results
        min_similarity: Minimum similarity [0, 100] to keep a candidate
        decay_scale: Distance scale of the similarity decay

    Returns:
        Up to ``limit`` results, rank 1 = most similar
    """
    scored: List[Tuple[Profile, float, float]] = []
    for candidate in candidates:
        if candidate.batch_id == target.batch_id:
            continue
        distance = profile_distance(target, candidate)
        similarity = similarity_from_distance(distance, decay_scale)
        if similarity < min_similarity:
            continue
        scored.append((candidate, distance, similarity))

    # sorted() is stable: equal similarities keep input order
    scored = sorted(scored, key=lambda item: item[2], reverse=True)[:max(limit, 0)]

    logger.debug(
        "Ranked %d candidates for %s (limit=%d, min_similarity=%.1f)",
        len(scored), target.batch_id, limit, min_similarity,
    )

    return [
        RankedResult(profile=profile, distance=distance, similarity=similarity, rank=index)
        for index, (profile, distance, similarity) in enumerate(scored, start=1)
    ]


def find_within_distance(
    target: Profile,
    candidates: Iterable[Profile],
    threshold: float = DEFAULT_DISTANCE_THRESHOLD,
) -> List[Tuple[str, float]]:
    """
    Find candidates within a raw distance of the target.

    The target is not excluded; if present it appears with distance 0.

    Args:
        target: Profile to match against
        candidates: Profiles to search
        threshold: Maximum Euclidean distance (inclusive)

    Returns:
        (batch_id, distance) pairs, nearest first
    """
    matches = [
        (candidate.batch_id, profile_distance(target, candidate))
        for candidate in candidates
    ]
    matches = [m for m in matches if m[1] <= threshold]
    return sorted(matches, key=lambda m: m[1])
