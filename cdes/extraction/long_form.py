"""
Long-form tabular extraction.

Handles the one-row-per-measurement layout:
    category 0 = batch id
    category 1 = raw compound label ("THC", "thc %", "Cannabidiol", ...)
    value 0    = percentage
"""

import logging
from typing import Dict, Optional

from cdes.extraction.tabular import batch_key, build_profiles, cell
from cdes.models import ParseResult, TabularInput
from cdes.normalization.name_resolver import NameResolver, get_default_resolver
from cdes.normalization.value_coercion import coerce_percentage

logger = logging.getLogger(__name__)


def can_parse(data: TabularInput) -> bool:
    """Long form needs a batch column, a label column and a value column."""
    return len(data.categories) >= 2 and len(data.values) >= 1


def parse(
    data: TabularInput,
    resolver: Optional[NameResolver] = None,
) -> Optional[ParseResult]:
    """
    Parse long-form input into profiles.

    Rows with a percentage <= 0 are counted but not stored. If the same
    (batch, compound) pair appears twice the last value wins.

    Args:
        data: Normalized tabular input
        resolver: Label resolver (module default if None)

    Returns:
        ParseResult with mode 'long', or None if the layout does not apply
        or no profile was produced
    """
    if not can_parse(data):
        return None

    resolver = resolver or get_default_resolver()
    batch_ids = data.categories[0]
    labels = data.categories[1]
    percentages = data.values[0]

    batches: Dict[str, Dict[str, float]] = {}
    records_processed = 0

    for row in range(min(len(batch_ids.values), len(labels.values))):
        batch_id = batch_key(cell(batch_ids, row))
        label = batch_key(cell(labels, row))
        percentage = coerce_percentage(cell(percentages, row))

        measurements = batches.setdefault(batch_id, {})
        code = resolver.resolve(label)

        if percentage > 0:
            if code in measurements:
                logger.debug(
                    "Duplicate %s for batch %s: %s replaces %s",
                    code, batch_id, percentage, measurements[code],
                )
            measurements[code] = percentage

        records_processed += 1

    if not batches:
        return None

    return ParseResult(
        profiles=build_profiles(batches),
        mode='long',
        records_processed=records_processed,
    )
