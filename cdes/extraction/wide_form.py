"""
Wide-form tabular extraction.

Handles the one-row-per-batch layout:
    category 0 = batch id
    value 0..N = percentages in fixed positional order
                 THC, CBD, CBN, CBG, CBC, THCV, CBDV, THCA, CBDA

Value columns past the ninth are ignored. Column headers are not
consulted: the position alone decides the compound.
"""

from typing import Dict, Optional, Sequence

from cdes.extraction.tabular import batch_key, build_profiles, cell
from cdes.models import ParseResult, TabularInput
from cdes.normalization.name_resolver import WIDE_FORM_ORDER
from cdes.normalization.value_coercion import coerce_percentage


def can_parse(data: TabularInput) -> bool:
    """Wide form needs at least a batch column."""
    return len(data.categories) >= 1


def parse(
    data: TabularInput,
    column_order: Sequence[str] = WIDE_FORM_ORDER,
) -> Optional[ParseResult]:
    """
    Parse wide-form input into profiles.

    Args:
        data: Normalized tabular input
        column_order: Compound code for each value column position

    Returns:
        ParseResult with mode 'wide', or None if the layout does not apply
        or no profile was produced
    """
    if not can_parse(data):
        return None

    batch_ids = data.categories[0]
    mapped = list(zip(column_order, data.values))

    batches: Dict[str, Dict[str, float]] = {}
    records_processed = 0

    for row in range(len(batch_ids.values)):
        batch_id = batch_key(cell(batch_ids, row))
        measurements = batches.setdefault(batch_id, {})

        for code, column in mapped:
            percentage = coerce_percentage(cell(column, row))
            if percentage > 0:
                measurements[code] = percentage

        records_processed += 1

    if not batches:
        return None

    return ParseResult(
        profiles=build_profiles(batches),
        mode='wide',
        records_processed=records_processed,
    )
