"""
Tests for compound label normalization and value coercion.

Tests:
- Label normalization pipeline
- Registry resolution and declared-order tie-breaks
- Passthrough of unresolved labels
- Numeric coercion of raw cells
"""

import math

import pytest

from cdes.normalization.name_resolver import (
    KNOWN_COMPOUNDS,
    WIDE_FORM_ORDER,
    NameResolver,
    normalize_label,
    resolve_canonical_name,
)
from cdes.normalization.value_coercion import coerce_percentage, is_positive_number
from tests.fixtures.test_data import LABEL_NORMALIZATION_CASES, LABEL_RESOLUTION_CASES


# ============================================================================
# LABEL NORMALIZATION TESTS
# ============================================================================

class TestNormalizeLabel:
    """Tests for normalize_label."""

    @pytest.mark.parametrize("raw,expected", LABEL_NORMALIZATION_CASES)
    def test_normalize_cases(self, raw, expected):
        assert normalize_label(raw) == expected

    def test_truncates_to_five_characters(self):
        assert normalize_label("tetrahydrocannabinol") == "TETRA"

    def test_strips_whitespace_hyphen_underscore(self):
        assert normalize_label(" c b-d_a ") == "CBDA"

    def test_non_string_is_stringified(self):
        assert normalize_label(12) == "12"


# ============================================================================
# NAME RESOLVER TESTS
# ============================================================================

class TestNameResolver:
    """Tests for NameResolver and resolve_canonical_name."""

    @pytest.mark.parametrize("raw,expected", LABEL_RESOLUTION_CASES)
    def test_resolution_cases(self, name_resolver, raw, expected):
        assert name_resolver.resolve(raw) == expected

    @pytest.mark.parametrize("raw,expected", LABEL_RESOLUTION_CASES)
    def test_module_function_matches_resolver(self, raw, expected):
        assert resolve_canonical_name(raw) == expected

    def test_registry_order_is_frozen(self, name_resolver):
        """Declared order decides overlapping codes."""
        assert name_resolver.codes == (
            'THC', 'CBD', 'CBN', 'CBG', 'CBC', 'THCV', 'CBDV', 'CBDA', 'THCA',
        )

    def test_unresolved_label_returned_verbatim(self, name_resolver):
        """Passthrough keeps the original casing and spacing."""
        assert name_resolver.resolve("  Beta-Caryophyllene ") == "  Beta-Caryophyllene "

    def test_empty_label_matches_first_code(self, name_resolver):
        """An empty normalized label is contained in every code."""
        assert name_resolver.resolve("") == "THC"
        assert name_resolver.resolve(" % ") == "THC"

    def test_custom_registry_order(self):
        resolver = NameResolver({'THCA': 'acid', 'THC': 'neutral'})
        assert resolver.resolve("THCA") == "THCA"
        assert resolver.resolve("THC") == "THCA"  # THC is contained in THCA

    def test_registry_is_read_only(self, name_resolver):
        with pytest.raises(TypeError):
            name_resolver.registry['XYZ'] = 'new'
        with pytest.raises(TypeError):
            KNOWN_COMPOUNDS['XYZ'] = 'new'

    def test_known_codes_and_full_names(self, name_resolver):
        assert name_resolver.is_known('CBG')
        assert not name_resolver.is_known('Myrcene')
        assert name_resolver.full_name('CBD') == 'Cannabidiol'
        assert name_resolver.full_name('Myrcene') == 'Myrcene'

    def test_wide_form_order_covers_registry(self):
        assert set(WIDE_FORM_ORDER) == set(KNOWN_COMPOUNDS)
        assert len(WIDE_FORM_ORDER) == 9
        # THCA precedes CBDA positionally, unlike the registry
        assert WIDE_FORM_ORDER[7:] == ('THCA', 'CBDA')


# ============================================================================
# VALUE COERCION TESTS
# ============================================================================

class TestCoercePercentage:
    """Tests for coerce_percentage."""

    @pytest.mark.parametrize("raw,expected", [
        (20, 20.0),
        (15.5, 15.5),
        ("20", 20.0),
        (" 0.75 ", 0.75),
        ("-5", -5.0),
        ("", 0.0),
        ("ND", 0.0),
        ("<LOQ", 0.0),
        (None, 0.0),
        (float('nan'), 0.0),
        (float('inf'), 0.0),
        ([1, 2], 0.0),
        ({'v': 1}, 0.0),
        ("1e2", 100.0),
        (".5", 0.5),
        ("+3.", 3.0),
        ("0x1A", 26.0),
        ("0b101", 5.0),
        ("0o17", 15.0),
        ("1_000", 0.0),
        ("-0x1A", 0.0),
        ("0b12", 0.0),
        ("Infinity", 0.0),
        ("nan", 0.0),
        ("1e400", 0.0),
        ("12.5%", 0.0),
    ])
    def test_coerce_cases(self, raw, expected):
        result = coerce_percentage(raw)
        assert isinstance(result, float)
        assert result == expected

    def test_bool_coerces_like_number(self):
        assert coerce_percentage(True) == 1.0
        assert coerce_percentage(False) == 0.0

    def test_result_is_finite(self):
        for raw in ("nan", "inf", "-inf", float('-inf')):
            assert math.isfinite(coerce_percentage(raw))
            assert coerce_percentage(raw) == 0.0


class TestIsPositiveNumber:
    """Tests for is_positive_number (record field check)."""

    @pytest.mark.parametrize("raw,expected", [
        (20, True),
        (0.01, True),
        (0, False),
        (-5, False),
        ("20", False),
        (None, False),
        (True, False),
        (float('nan'), False),
    ])
    def test_positive_cases(self, raw, expected):
        assert is_positive_number(raw) is expected
