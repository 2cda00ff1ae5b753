"""
Cannabinoid name resolution.

Maps raw compound labels from lab exports and BI datasets ("thc %",
"Delta-9 THC", "cbd_a") onto the canonical cannabinoid codes used as
profile keys.

Resolution is a best-effort fuzzy match against a fixed registry, not a
dictionary lookup: the label is normalized, then the registry is scanned
in declared order and the first code that contains the normalized label,
or is contained by it, wins. Labels that match nothing pass through
verbatim and become their own key.
"""

import re
from types import MappingProxyType
from typing import Any, Mapping, Tuple

# Versioned normalization; increment when rules change
NORMALIZATION_VERSION = 1

# Max characters kept after normalization
LABEL_PREFIX_LENGTH = 5

# Declared order is the tie-break for ambiguous matches. Do not reorder.
KNOWN_COMPOUNDS: Mapping[str, str] = MappingProxyType({
    'THC': 'Delta-9-tetrahydrocannabinol',
    'CBD': 'Cannabidiol',
    'CBN': 'Cannabinol',
    'CBG': 'Cannabigerol',
    'CBC': 'Cannabichromene',
    'THCV': 'Tetrahydrocannabivarin',
    'CBDV': 'Cannabidivarin',
    'CBDA': 'Cannabidiolic acid',
    'THCA': 'Tetrahydrocannabinolic acid',
})

# Positional column order used by wide-form exports and batch records
WIDE_FORM_ORDER: Tuple[str, ...] = (
    'THC', 'CBD', 'CBN', 'CBG', 'CBC', 'THCV', 'CBDV', 'THCA', 'CBDA',
)

_STRIP_PATTERN = re.compile(r'[\s\-_]')


def normalize_label(raw_label: Any) -> str:
    """
    Normalize a raw compound label for registry matching.

    Pipeline: uppercase, trim, strip whitespace/hyphen/underscore, strip
    '%', truncate to 5 characters.

    Args:
        raw_label: Raw label text (non-strings are stringified)

    Returns:
        Normalized label

    Examples:
        >>> normalize_label("thc %")
        'THC'
        >>> normalize_label("  cbd-a ")
        'CBDA'
        >>> normalize_label("Cannabidiol")
        'CANNA'
    """
    text = raw_label if isinstance(raw_label, str) else str(raw_label)
    text = _STRIP_PATTERN.sub('', text.upper().strip())
    text = text.replace('%', '')
    return text[:LABEL_PREFIX_LENGTH]


class NameResolver:
    """
    Resolves raw compound labels to canonical cannabinoid codes.

    The registry is copied into an immutable mapping on construction and
    never modified, so one instance can be shared across threads.
    """

    def __init__(self, registry: Mapping[str, str] = KNOWN_COMPOUNDS):
        """
        Initialize the resolver.

        Args:
            registry: Ordered mapping of canonical code -> full name
        """
        self.registry = MappingProxyType(dict(registry))
        self._codes = tuple(self.registry)

    @property
    def codes(self) -> Tuple[str, ...]:
        """Canonical codes in declared (tie-break) order."""
        return self._codes

    def resolve(self, raw_label: Any) -> str:
        """
        Resolve a raw label to its canonical code.

        Args:
            raw_label: Raw compound label

        Returns:
            First registry code K with K in label or label in K, otherwise
            the raw label unchanged
        """
        normalized = normalize_label(raw_label)
        for code in self._codes:
            if code in normalized or normalized in code:
                return code
        return raw_label

    def is_known(self, code: str) -> bool:
        """Check whether a code is one of the registry entries."""
        return code in self.registry

    def full_name(self, code: str) -> str:
        """Full chemical name for a code, or the code itself if unknown."""
        return self.registry.get(code, code)


# Built eagerly at import; read-only afterwards
_default_resolver = NameResolver()


def get_default_resolver() -> NameResolver:
    """Get the module-level resolver built from KNOWN_COMPOUNDS."""
    return _default_resolver


def resolve_canonical_name(raw_label: Any) -> str:
    """
    Convenience function for label resolution.

    Uses the module-level NameResolver built from the fixed registry.

    Args:
        raw_label: Raw compound label

    Returns:
        Canonical code, or the raw label if nothing matches
    """
    return _default_resolver.resolve(raw_label)
