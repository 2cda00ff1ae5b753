"""
Normalization package for cannabinoid labels and measurement values.

This package resolves raw compound labels onto canonical codes and
coerces raw measurement cells into percentages.
"""

from .name_resolver import (
    KNOWN_COMPOUNDS,
    WIDE_FORM_ORDER,
    NameResolver,
    get_default_resolver,
    normalize_label,
    resolve_canonical_name,
)
from .value_coercion import coerce_percentage, is_positive_number

__all__ = [
    'KNOWN_COMPOUNDS',
    'WIDE_FORM_ORDER',
    'NameResolver',
    'get_default_resolver',
    'normalize_label',
    'resolve_canonical_name',
    'coerce_percentage',
    'is_positive_number',
]
