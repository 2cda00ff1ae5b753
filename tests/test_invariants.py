"""
Invariant Test Suite - Stability Gates for the CDES profile toolkit

These tests encode contract-level invariants as executable assertions.
They cut across modules rather than testing one function:

  1. Profile totals always equal the sum of measurements
  2. Profiles and parse results are immutable
  3. Distance is a symmetric, zero-on-identity metric
  4. Similarity is bounded and non-increasing in distance
  5. Non-positive values are never stored
  6. Parsing never raises on malformed input
  7. Caller-visible message strings are frozen

Run:  pytest tests/test_invariants.py -v
"""

import dataclasses
import itertools

import pytest

from cdes import (
    compare,
    find_similar,
    parse_record,
    parse_records,
    parse_tabular,
    score_completeness,
)
from cdes.analysis.completeness import COMPLETE_MESSAGE, COVERAGE_MESSAGES
from cdes.analysis.distance import profile_distance, similarity_from_distance
from cdes.models import ParseResult, Profile
from tests.fixtures.profile_helpers import assert_total_consistent, make_profile
from tests.fixtures.test_data import (
    LONG_FORM_MULTI_BATCH,
    LONG_FORM_SINGLE_BATCH,
    SAMPLE_BATCH_RECORDS,
    WIDE_FORM_SINGLE_BATCH,
)


SAMPLE_PROFILES = [
    make_profile('p0', {}),
    make_profile('p1', {'THC': 20, 'CBD': 15, 'CBN': 2}),
    make_profile('p2', {'THC': 21, 'CBD': 14, 'CBN': 2.5}),
    make_profile('p3', {'CBD': 12.2, 'CBDA': 3.1}),
    make_profile('p4', {'THC': 0.3, 'Myrcene': 0.9}),
]


# ============================================================================
# 1. TOTALS
# ============================================================================

class TestTotalInvariant:

    @pytest.mark.parametrize("data", [
        LONG_FORM_SINGLE_BATCH, LONG_FORM_MULTI_BATCH, WIDE_FORM_SINGLE_BATCH,
    ])
    def test_tabular_totals(self, data):
        for profile in parse_tabular(data).profiles:
            assert_total_consistent(profile)

    def test_record_totals(self):
        for profile in parse_records(SAMPLE_BATCH_RECORDS):
            assert_total_consistent(profile)

    def test_constructed_totals(self):
        for profile in SAMPLE_PROFILES:
            assert_total_consistent(profile)

    def test_total_not_settable(self):
        with pytest.raises(TypeError):
            Profile(batch_id='b', measurements={'THC': 1}, total=5)


# ============================================================================
# 2. IMMUTABILITY
# ============================================================================

class TestImmutability:

    def test_profile_fields_frozen(self, profile_a):
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile_a.total = 0
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile_a.batch_id = 'other'

    def test_measurements_read_only(self, profile_a):
        with pytest.raises(TypeError):
            profile_a.measurements['THC'] = 99

    def test_source_mapping_changes_do_not_leak(self):
        source = {'THC': 20}
        profile = make_profile('b', source)
        source['CBD'] = 5

        assert profile.measurements == {'THC': 20}
        assert profile.total == 20

    def test_parse_result_frozen(self, long_form_input):
        result = parse_tabular(long_form_input)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.mode = 'wide'

    def test_parse_result_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            ParseResult(profiles=[], mode='standard')


# ============================================================================
# 3–4. METRIC PROPERTIES
# ============================================================================

class TestMetricInvariants:

    @pytest.mark.parametrize("profile", SAMPLE_PROFILES, ids=lambda p: p.batch_id)
    def test_distance_zero_on_identity(self, profile):
        assert profile_distance(profile, profile) == 0
        assert compare(profile, profile).similarity == 100

    def test_distance_symmetric(self):
        for a, b in itertools.combinations(SAMPLE_PROFILES, 2):
            assert profile_distance(a, b) == profile_distance(b, a)

    def test_distance_positive_for_distinct(self):
        for a, b in itertools.combinations(SAMPLE_PROFILES, 2):
            assert profile_distance(a, b) > 0

    def test_similarity_bounded_and_monotone(self):
        distances = sorted(
            profile_distance(a, b) for a, b in itertools.combinations(SAMPLE_PROFILES, 2)
        )
        scores = [similarity_from_distance(d) for d in distances]

        assert all(0 <= s <= 100 for s in scores)
        assert all(x >= y for x, y in zip(scores, scores[1:]))

    def test_ranking_never_returns_target(self):
        for target in SAMPLE_PROFILES:
            results = find_similar(target, SAMPLE_PROFILES, limit=10, min_similarity=0)
            assert all(r.profile.batch_id != target.batch_id for r in results)
            assert [r.rank for r in results] == list(range(1, len(results) + 1))


# ============================================================================
# 5. NON-POSITIVE VALUES
# ============================================================================

class TestNonPositiveValues:

    @pytest.mark.parametrize("value", [0, -5, 0.0, -0.001])
    def test_long_form(self, value):
        data = {
            'categories': [{'values': ['b1']}, {'values': ['CBG']}],
            'values': [{'values': [value]}],
        }
        assert 'CBG' not in parse_tabular(data).profiles[0].measurements

    @pytest.mark.parametrize("value", [0, -5])
    def test_wide_form(self, value):
        data = {'categories': [{'values': ['b1']}], 'values': [{'values': [value]}]}
        assert parse_tabular(data).profiles[0].measurements == {}

    @pytest.mark.parametrize("value", [0, -5])
    def test_record(self, value):
        assert parse_record({'id': 'b1', 'cbg': value}).measurements == {}


# ============================================================================
# 6. NEVER RAISES
# ============================================================================

class TestNeverRaises:

    @pytest.mark.parametrize("data", [
        None, 0, "", b"bytes", object(), {'categories': [[None, {}], [[], 3.5]]},
        {'categories': [{'values': None}], 'values': [{'values': None}]},
        {'categories': [{'values': [None, None]}, {'values': [None, 7]}], 'values': [[{}]]},
    ])
    def test_parse_tabular(self, data):
        assert isinstance(parse_tabular(data), ParseResult)

    @pytest.mark.parametrize("record", [None, 0, "b1", [], {'id': None, 'thc': {}}])
    def test_parse_record(self, record):
        assert isinstance(parse_record(record), Profile)


# ============================================================================
# 7. FROZEN MESSAGES
# ============================================================================

class TestFrozenMessages:

    def test_completeness_messages_verbatim(self):
        assert [m for _, m in COVERAGE_MESSAGES] == [
            "Incomplete profile - limited cannabinoid data",
            "Partial profile - some cannabinoid data",
            "Good profile - most cannabinoids detected",
        ]
        assert COMPLETE_MESSAGE == "Complete profile - all major cannabinoids detected"

    def test_score_uses_frozen_messages(self):
        messages = {m for _, m in COVERAGE_MESSAGES} | {COMPLETE_MESSAGE}
        for profile in SAMPLE_PROFILES:
            assert score_completeness(profile).message in messages
