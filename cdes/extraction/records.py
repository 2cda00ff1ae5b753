"""
Batch record extraction.

Handles flat key/value batch records as delivered by JSON APIs and
dispensary menus:

    {"id": "b123", "name": "Blue Dream", "thc": 20.1, "CBD": 0.4, ...}

Records are unambiguous by construction: each compound is looked up
under its lower-case code first, then its exact code.
"""

from collections.abc import Iterable as IterableABC
from typing import Any, Dict, Iterable, List, Mapping

from loguru import logger

from cdes.models import Profile
from cdes.normalization.name_resolver import WIDE_FORM_ORDER
from cdes.normalization.value_coercion import is_positive_number

UNKNOWN_BATCH_ID = 'unknown'


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def parse_record(record: Mapping[str, Any]) -> Profile:
    """
    Parse one batch record into a profile.

    Args:
        record: Open mapping of field name -> value

    Returns:
        Profile; non-mapping input yields an empty 'unknown' profile
    """
    if not isinstance(record, Mapping):
        logger.debug(f"Ignoring non-mapping batch record of type {type(record).__name__}")
        return Profile(batch_id=UNKNOWN_BATCH_ID)

    batch_id = _as_text(record.get('id') or record.get('batchId') or UNKNOWN_BATCH_ID)
    batch_name = _as_text(record.get('name') or record.get('strain') or batch_id)

    measurements: Dict[str, float] = {}
    for code in WIDE_FORM_ORDER:
        value = record.get(code.lower()) or record.get(code)
        if is_positive_number(value):
            measurements[code] = float(value)
        elif value is not None and value != 0:
            logger.debug(f"Batch {batch_id}: dropping {code}={value!r} (not a positive number)")

    return Profile(batch_id=batch_id, batch_name=batch_name, measurements=measurements)


def parse_records(records: Iterable[Mapping[str, Any]]) -> List[Profile]:
    """
    Parse a sequence of batch records, one profile per record.

    Args:
        records: Batch records

    Returns:
        Profiles in input order
    """
    if not isinstance(records, IterableABC) or isinstance(records, (str, bytes, Mapping)):
        return []
    return [parse_record(record) for record in records]
