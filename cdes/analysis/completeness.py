"""
Profile completeness scoring.

Rates how many of the nine known cannabinoids a profile reports, with
bonus points for broad panels and high total content.
"""

from cdes.models import CompletenessScore, Profile
from cdes.normalization.name_resolver import KNOWN_COMPOUNDS

MAX_COMPOUNDS = len(KNOWN_COMPOUNDS)
MAX_SCORE = 100.0

BONUS_KEY_COUNT = 7
BONUS_KEY_POINTS = 20
BONUS_TOTAL = 10.0
BONUS_TOTAL_POINTS = 10

# (coverage upper bound, message); coverage >= last bound -> COMPLETE_MESSAGE
COVERAGE_MESSAGES = (
    (30, "Incomplete profile - limited cannabinoid data"),
    (60, "Partial profile - some cannabinoid data"),
    (90, "Good profile - most cannabinoids detected"),
)
COMPLETE_MESSAGE = "Complete profile - all major cannabinoids detected"


def coverage_message(coverage: float) -> str:
    for bound, message in COVERAGE_MESSAGES:
        if coverage < bound:
            return message
    return COMPLETE_MESSAGE


def score_completeness(
    profile: Profile,
    bonus_key_count: int = BONUS_KEY_COUNT,
    bonus_total: float = BONUS_TOTAL,
) -> CompletenessScore:
    """
    Score how complete a profile is.

    Every measurement key counts toward coverage, including labels the
    resolver could not map onto a known code.

    Args:
        profile: Profile to score
        bonus_key_count: Key count that earns the broad-panel bonus
        bonus_total: Total content above which the potency bonus applies

    Returns:
        CompletenessScore with score (capped at 100), coverage and message
    """
    detected = profile.compound_count
    coverage = detected / MAX_COMPOUNDS * 100

    score = coverage
    if detected >= bonus_key_count:
        score += BONUS_KEY_POINTS
    if profile.total > bonus_total:
        score += BONUS_TOTAL_POINTS

    return CompletenessScore(
        score=min(MAX_SCORE, score),
        coverage=coverage,
        message=coverage_message(coverage),
    )
