"""
Tabular input shape handling.

Normalizes whatever the caller hands in (a TabularInput, a BI-style dict
of ``{"categories": [...], "values": [...]}``, or something malformed)
into a TabularInput, and collects per-batch measurements into profiles.
"""

from typing import Any, Dict, List

from cdes.models import Column, Profile, TabularInput


def _as_column(raw: Any) -> Column:
    """Coerce one raw column entry; unusable entries become empty columns."""
    if isinstance(raw, Column):
        values = raw.values if isinstance(raw.values, (list, tuple)) else []
        return Column(values=list(values), display_name=raw.display_name)

    if isinstance(raw, dict):
        values = raw.get('values')
        source = raw.get('source')
        display_name = raw.get('display_name')
        if display_name is None and isinstance(source, dict):
            display_name = source.get('displayName')
        if not isinstance(values, (list, tuple)):
            values = []
        return Column(values=list(values), display_name=display_name)

    if isinstance(raw, (list, tuple)):
        return Column(values=list(raw))

    return Column()


def _as_column_list(raw: Any) -> List[Column]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [_as_column(entry) for entry in raw]


def as_tabular(data: Any) -> TabularInput:
    """
    Coerce raw input into a TabularInput.

    Absent or malformed ``categories``/``values`` become empty lists;
    individual malformed columns become empty columns so positional
    indexes are preserved.

    Args:
        data: TabularInput, dict, or any other object

    Returns:
        A fresh TabularInput (the input is never mutated)
    """
    if isinstance(data, TabularInput):
        return TabularInput(
            categories=_as_column_list(data.categories),
            values=_as_column_list(data.values),
        )

    if isinstance(data, dict):
        return TabularInput(
            categories=_as_column_list(data.get('categories')),
            values=_as_column_list(data.get('values')),
        )

    return TabularInput()


def cell(column: Column, index: int) -> Any:
    """Get a cell by row index, or None past the end of the column."""
    if index < len(column.values):
        return column.values[index]
    return None


def batch_key(value: Any) -> str:
    """Stringify a batch identifier cell."""
    return value if isinstance(value, str) else str(value)


def build_profiles(batches: Dict[str, Dict[str, float]]) -> List[Profile]:
    """
    Build profiles from accumulated batch measurements.

    Args:
        batches: batch_id -> {code: percentage}, in first-seen order

    Returns:
        Profiles in the same order, each named after its batch id
    """
    return [
        Profile(batch_id=batch_id, batch_name=batch_id, measurements=measurements)
        for batch_id, measurements in batches.items()
    ]
