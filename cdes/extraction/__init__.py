"""
Profile extraction module.

Provides layout detection and extraction for cannabinoid measurement
data delivered as categorical BI datasets, pandas DataFrames, CSV/XLSX
lab exports, and flat JSON batch records.

Usage:
    from cdes.extraction import parse_tabular, parse_records

    result = parse_tabular({"categories": [...], "values": [...]})
    profiles = parse_records(batches)
"""

from typing import Any, Optional

from cdes.models import ParseResult
from cdes.normalization.name_resolver import NameResolver

from .dataframe import (
    dataframe_to_tabular,
    load_table,
    parse_dataframe,
    parse_file,
    profiles_to_dataframe,
)
from .detector import build_strategies, detect_format, parse_tabular
from .records import parse_record, parse_records
from .tabular import as_tabular
from . import long_form
from . import wide_form


def extract_profiles(data: Any, fmt: str, resolver: Optional[NameResolver] = None) -> ParseResult:
    """
    Dispatch to a specific layout extractor, skipping detection.

    Args:
        data: TabularInput or categorical dict
        fmt: Layout string ('long' or 'wide')
        resolver: Label resolver for long-form labels

    Returns:
        ParseResult; empty 'unknown' result if the layout does not apply
    """
    tabular = as_tabular(data)
    result = None
    if fmt == 'long':
        result = long_form.parse(tabular, resolver=resolver)
    elif fmt == 'wide':
        result = wide_form.parse(tabular)

    if result is None:
        return ParseResult(profiles=[], mode='unknown', records_processed=0)
    return result


__all__ = [
    'as_tabular',
    'build_strategies',
    'dataframe_to_tabular',
    'detect_format',
    'extract_profiles',
    'load_table',
    'parse_dataframe',
    'parse_file',
    'parse_record',
    'parse_records',
    'parse_tabular',
    'profiles_to_dataframe',
    'long_form',
    'wide_form',
]
