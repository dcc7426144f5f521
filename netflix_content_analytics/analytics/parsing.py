"""Parsers for free-text duration and date fields."""
import logging
from datetime import date, datetime
from typing import Callable

import pandas as pd

from netflix_content_analytics.config import PARSE_ERROR_POLICIES
from netflix_content_analytics.exceptions import DateParseError, DurationParseError

logger = logging.getLogger(__name__)

# e.g. "September 25, 2021"
DATE_ADDED_FORMAT = "%B %d, %Y"


def parse_duration(value: str | None, show_id: str | None = None) -> int:
    """
    Extract the leading integer of a duration ("90 min", "3 Seasons").

    Args:
        value: Raw duration text
        show_id: Owning record, used in the error message

    Returns:
        Minutes for movies, seasons for TV shows

    Raises:
        DurationParseError: If the text before the first space is not an integer
    """
    if pd.isna(value):
        raise DurationParseError(value, show_id)

    head = str(value).strip().split(" ", 1)[0]
    try:
        return int(head)
    except ValueError:
        raise DurationParseError(value, show_id) from None


def parse_date_added(value: str | None, show_id: str | None = None) -> date:
    """
    Parse date_added in "Month DD, YYYY" format.

    Raises:
        DateParseError: If the value is null or not in the expected format
    """
    if pd.isna(value):
        raise DateParseError(value, show_id)

    try:
        return datetime.strptime(str(value).strip(), DATE_ADDED_FORMAT).date()
    except ValueError:
        raise DateParseError(value, show_id) from None


def parse_column(
    frame: pd.DataFrame,
    column: str,
    parser: Callable,
    on_error: str = "skip",
) -> tuple[pd.Series, list[str]]:
    """
    Apply a per-record parser to one column.

    Under the 'skip' policy failing records are logged and left out of the
    returned series; under 'raise' the first failure propagates.

    Args:
        frame: Catalog DataFrame
        column: Column to parse
        parser: parse_duration or parse_date_added
        on_error: 'skip' or 'raise'

    Returns:
        (parsed values indexed like frame, skipped show IDs) tuple
    """
    if on_error not in PARSE_ERROR_POLICIES:
        raise ValueError(f"on_error must be one of {PARSE_ERROR_POLICIES}, got {on_error!r}")

    parsed = {}
    skipped: list[str] = []

    for index, show_id, value in zip(frame.index, frame["show_id"], frame[column]):
        try:
            parsed[index] = parser(value, show_id)
        except (DurationParseError, DateParseError) as e:
            if on_error == "raise":
                raise
            logger.warning(f"Skipping {column} for show {show_id}: {e}")
            skipped.append(show_id)

    return pd.Series(parsed, dtype=object), skipped
