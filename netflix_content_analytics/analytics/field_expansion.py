"""Expansion of comma-separated catalog fields into atomic values."""
from typing import Iterator, Mapping

import pandas as pd

MULTI_VALUE_FIELDS = ("director", "casts", "country", "listed_in")

DELIMITER = ","


def split_multi_value(value: str | None) -> Iterator[str]:
    """
    Lazily split a comma-separated field into trimmed atomic values.

    Null values and empty tokens (e.g. from a trailing comma) yield nothing.

    Args:
        value: Raw field value (can be None/NaN)

    Yields:
        Trimmed atomic values in field order
    """
    if pd.isna(value):
        return

    for token in str(value).split(DELIMITER):
        token = token.strip()
        if token:
            yield token


def _check_multi_value_field(field: str) -> None:
    if field not in MULTI_VALUE_FIELDS:
        raise ValueError(f"{field!r} is not a multi-valued field; expected one of {MULTI_VALUE_FIELDS}")


def expand_field(record: Mapping, field: str) -> Iterator[str]:
    """
    Expand one record's multi-valued field.

    Args:
        record: Catalog record (dict or DataFrame row)
        field: One of director, casts, country, listed_in

    Returns:
        Iterator of atomic values
    """
    _check_multi_value_field(field)
    return split_multi_value(record.get(field))


def explode_field(frame: pd.DataFrame, field: str, value_column: str) -> pd.DataFrame:
    """
    Turn each record into one row per atomic value of a multi-valued field.

    Records whose field is null or empty contribute no rows. The source
    frame is not modified.

    Args:
        frame: Catalog DataFrame
        field: One of director, casts, country, listed_in
        value_column: Name of the column holding the atomic value

    Returns:
        DataFrame with the original columns plus value_column
    """
    _check_multi_value_field(field)

    values = [list(expand_field(record, field)) for record in frame[[field]].to_dict("records")]
    exploded = frame.assign(
        **{value_column: pd.Series(values, index=frame.index, dtype=object)}
    ).explode(value_column)

    # Empty lists explode to NaN rows
    exploded = exploded[exploded[value_column].notna()]
    return exploded.astype({value_column: object})
