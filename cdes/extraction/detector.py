"""
Tabular layout detection.

Auto-detects whether a categorical dataset is long-form or wide-form by
trying each layout's extractor in turn. The input carries no explicit
format marker, so detection is by sequential fallback:

  1. Long form  - batch | compound | value, one row per measurement
  2. Wide form  - batch | THC | CBD | ..., one row per batch
  3. Unknown    - empty result

The first extractor that produces at least one profile wins. Adding a
layout means appending an extractor to ``build_strategies``.
"""

import logging
from functools import partial
from typing import Any, Callable, List, Optional

from cdes.extraction import long_form, wide_form
from cdes.extraction.tabular import as_tabular
from cdes.models import ParseResult, TabularInput
from cdes.normalization.name_resolver import NameResolver

logger = logging.getLogger(__name__)

Strategy = Callable[[TabularInput], Optional[ParseResult]]


def build_strategies(resolver: Optional[NameResolver] = None) -> List[Strategy]:
    """
    Build the ordered list of layout extractors.

    Args:
        resolver: Label resolver for layouts that carry compound labels

    Returns:
        Extractors in priority order
    """
    return [
        partial(long_form.parse, resolver=resolver),
        wide_form.parse,
    ]


def parse_tabular(data: Any, resolver: Optional[NameResolver] = None) -> ParseResult:
    """
    Parse an ambiguous categorical dataset into profiles.

    Never raises on malformed input: anything unrecognized yields an
    empty result with mode 'unknown'.

    Args:
        data: TabularInput or ``{"categories": [...], "values": [...]}`` dict
        resolver: Label resolver (module default if None)

    Returns:
        ParseResult from the first layout that produced profiles
    """
    tabular = as_tabular(data)

    if not tabular.categories:
        logger.debug("No category columns; layout unknown")
        return ParseResult(profiles=[], mode='unknown', records_processed=0)

    for strategy in build_strategies(resolver):
        result = strategy(tabular)
        if result is not None and result.profiles:
            logger.debug(
                "Detected %s layout: %d profiles from %d rows",
                result.mode, len(result.profiles), result.records_processed,
            )
            return result

    logger.debug(
        "No layout matched (%d category, %d value columns)",
        len(tabular.categories), len(tabular.values),
    )
    return ParseResult(profiles=[], mode='unknown', records_processed=0)


def detect_format(data: Any) -> str:
    """
    Detect the layout of a categorical dataset.

    Returns:
        One of 'long', 'wide', or 'unknown'.
    """
    return parse_tabular(data).mode
