"""
DataFrame ingestion and export.

Bridges spreadsheet-style lab exports (CSV/XLSX read with pandas) to the
categorical layout parser, and exports profiles back to a wide table.

Column typing decides the role of each column:
  - object/string/categorical columns -> category columns (batch, compound)
  - numeric columns                   -> value columns (percentages)
Both keep their left-to-right order, so a long-form sheet
``Batch | Cannabinoid | Percent`` and a wide-form sheet
``Batch | THC | CBD | ...`` are both recognized by ``parse_tabular``.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

import pandas as pd
from loguru import logger

from cdes.extraction.detector import parse_tabular
from cdes.models import Column, ParseResult, Profile, TabularInput
from cdes.normalization.name_resolver import WIDE_FORM_ORDER, NameResolver

SUPPORTED_SUFFIXES = ('.csv', '.xlsx')


def _column_cells(series: pd.Series) -> List[Any]:
    """Column values with NaN/NaT replaced by None."""
    return [None if pd.isna(v) else v for v in series.tolist()]


def _is_category(series: pd.Series) -> bool:
    return pd.api.types.is_bool_dtype(series) or not pd.api.types.is_numeric_dtype(series)


def dataframe_to_tabular(
    df: pd.DataFrame,
    category_columns: Optional[Sequence[str]] = None,
) -> TabularInput:
    """
    Split a DataFrame into category and value columns.

    Args:
        df: DataFrame with a header row
        category_columns: Columns to force into the category role
            (e.g. numeric batch ids); other columns are typed by dtype

    Returns:
        TabularInput; an empty frame yields an empty input
    """
    tabular = TabularInput()
    if df is None or df.empty:
        return tabular

    forced = set(category_columns or ())
    for name in df.columns:
        series = df[name]
        column = Column(values=_column_cells(series), display_name=str(name))
        if name in forced or _is_category(series):
            tabular.categories.append(column)
        else:
            tabular.values.append(column)

    logger.debug(
        f"DataFrame split into {len(tabular.categories)} category and "
        f"{len(tabular.values)} value columns"
    )
    return tabular


def parse_dataframe(
    df: pd.DataFrame,
    resolver: Optional[NameResolver] = None,
    category_columns: Optional[Sequence[str]] = None,
) -> ParseResult:
    """
    Parse a DataFrame into profiles via layout detection.

    Args:
        df: Long-form or wide-form DataFrame
        resolver: Label resolver (module default if None)
        category_columns: Columns to force into the category role

    Returns:
        ParseResult (mode 'unknown' with no profiles if unrecognized)
    """
    tabular = dataframe_to_tabular(df, category_columns=category_columns)
    return parse_tabular(tabular, resolver=resolver)


def load_table(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load a lab export from disk.

    Args:
        path: Path to a .csv or .xlsx file

    Returns:
        DataFrame with the first row used as header

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file suffix is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type '{suffix}', must be one of {SUPPORTED_SUFFIXES}"
        )
    if not path.exists():
        raise FileNotFoundError(f"Lab export not found: {path}")

    if suffix == '.csv':
        df = pd.read_csv(path)
    else:
        df = pd.read_excel(path, engine='openpyxl')

    logger.info(f"Loaded {len(df)} rows x {len(df.columns)} columns from {path.name}")
    return df


def parse_file(
    path: Union[str, Path],
    resolver: Optional[NameResolver] = None,
    category_columns: Optional[Sequence[str]] = None,
) -> ParseResult:
    """Load a lab export and parse it into profiles."""
    return parse_dataframe(load_table(path), resolver=resolver, category_columns=category_columns)


def profiles_to_dataframe(profiles: Iterable[Profile], include_names: bool = True) -> pd.DataFrame:
    """
    Export profiles as a wide table, one row per batch.

    Columns: batch_id, batch_name, the nine known codes, any unresolved
    compound keys (first-seen order), total. Missing compounds are 0.0.

    Pass ``include_names=False`` to get a frame that ``parse_dataframe``
    reads back as wide-form (batch_name would otherwise be taken as the
    compound column of a long-form sheet).

    Args:
        profiles: Profiles to export
        include_names: Include the batch_name column

    Returns:
        DataFrame in wide layout
    """
    profiles = list(profiles)
    extra: List[str] = []
    for profile in profiles:
        for code in profile.measurements:
            if code not in WIDE_FORM_ORDER and code not in extra:
                extra.append(code)

    compound_columns = list(WIDE_FORM_ORDER) + extra
    id_columns = ['batch_id', 'batch_name'] if include_names else ['batch_id']
    rows = []
    for profile in profiles:
        row = {'batch_id': profile.batch_id}
        if include_names:
            row['batch_name'] = profile.batch_name
        for code in compound_columns:
            row[code] = profile.get(code)
        row['total'] = profile.total
        rows.append(row)

    return pd.DataFrame(rows, columns=id_columns + compound_columns + ['total'])
