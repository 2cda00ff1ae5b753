"""
Cannabinoid diversity scoring.

Scores how broad a profile is: points per compound detected, plus
bonuses for minor cannabinoids (CBN, CBG, CBC) and meaningful THCV.
Used to label a batch's expected complexity of effect.
"""

from cdes.models import DiversityScore, Profile

POINTS_PER_COMPOUND = 5
MINOR_CANNABINOIDS = ('CBN', 'CBG', 'CBC')
MINOR_BONUS = 15
THCV_THRESHOLD = 0.5
THCV_BONUS = 10

# (score lower bound, label, description), checked in order
DIVERSITY_LEVELS = (
    (70, 'Complex & Rich',
     'Full spectrum with multiple cannabinoids - expect nuanced effects'),
    (50, 'Balanced',
     'Good cannabinoid diversity - moderate complexity expected'),
    (30, 'Simple',
     'Limited cannabinoid profile - straightforward effects'),
)
BASIC_LABEL = 'Basic'
BASIC_DESCRIPTION = 'Very limited cannabinoid data'


def score_diversity(profile: Profile) -> DiversityScore:
    """
    Score a profile's cannabinoid diversity.

    The label is chosen from the uncapped score; the reported score is
    capped at 100.

    Args:
        profile: Profile to score

    Returns:
        DiversityScore with score, label and description
    """
    score = profile.compound_count * POINTS_PER_COMPOUND
    if any(code in profile.measurements for code in MINOR_CANNABINOIDS):
        score += MINOR_BONUS
    if profile.get('THCV') > THCV_THRESHOLD:
        score += THCV_BONUS

    label, description = BASIC_LABEL, BASIC_DESCRIPTION
    for bound, level_label, level_description in DIVERSITY_LEVELS:
        if score > bound:
            label, description = level_label, level_description
            break

    return DiversityScore(score=min(100, score), profile=label, description=description)
