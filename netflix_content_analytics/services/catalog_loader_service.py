"""Service to load the media catalog into an in-memory DataFrame"""
from pathlib import Path
from typing import Iterable, Mapping, Optional
import logging

import pandas as pd
from sqlalchemy.orm import Session

from netflix_content_analytics.config import get_dataset_path
from netflix_content_analytics.exceptions import SchemaMismatchError
from netflix_content_analytics.models import CATALOG_FIELDS
from netflix_content_analytics.repos import CatalogRepository

logger = logging.getLogger(__name__)

# Column names used by the published netflix_titles.csv
SOURCE_COLUMN_ALIASES = {
    'type': 'content_type',
    'cast': 'casts',
}

REQUIRED_FIELDS = ('show_id', 'content_type', 'title', 'release_year', 'listed_in', 'description')


def _normalize_text(values: pd.Series) -> pd.Series:
    """Keep text as-is, turning NaN and blank strings into None."""
    normalized = [None if pd.isna(v) or not str(v).strip() else str(v) for v in values]
    return pd.Series(normalized, index=values.index, dtype=object)


class CatalogDataLoader:
    """Service to load catalog titles from a CSV file, records or the database."""

    def __init__(self, dataset_path: Optional[str | Path] = None):
        self.dataset_path = Path(dataset_path or get_dataset_path())

    def load_csv(self, path: Optional[str | Path] = None) -> pd.DataFrame:
        """
        Load and validate the catalog from a CSV file.

        Args:
            path: CSV path (default: configured dataset path)

        Returns:
            Catalog DataFrame with the twelve catalog columns
        """
        path = Path(path) if path else self.dataset_path

        if not path.exists():
            raise FileNotFoundError(
                f"Catalog file not found: {path}\n"
                "Set NETFLIX_DATASET_PATH or pass the file path explicitly."
            )

        # Everything as text; only empty cells are missing values
        raw = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[''])
        logger.info(f"Loaded {len(raw)} rows from {path}")

        return self.prepare(raw)

    def load_records(self, records: Iterable[Mapping]) -> pd.DataFrame:
        """Load and validate the catalog from an iterable of mappings."""
        records = list(records)
        if not records:
            return self.prepare(pd.DataFrame(columns=list(CATALOG_FIELDS)))
        return self.prepare(pd.DataFrame(records))

    def load_from_database(self, db: Session) -> pd.DataFrame:
        """Load and validate the catalog stored in the `netflix` table."""
        records = CatalogRepository(db).to_records()
        logger.info(f"Loaded {len(records)} rows from database")
        return self.prepare(pd.DataFrame(records, columns=list(CATALOG_FIELDS)))

    def prepare(self, raw: pd.DataFrame) -> pd.DataFrame:
        """
        Validate raw rows against the catalog schema and coerce types.

        Only release_year is coerced (to int); every other column stays
        text. Malformed duration/date_added values are accepted here and
        surface when a query parses them.

        Raises:
            SchemaMismatchError: If a column is missing, a required value is
                null, show_id repeats, or release_year is not an integer
        """
        frame = raw.rename(columns=SOURCE_COLUMN_ALIASES)

        missing = [field for field in CATALOG_FIELDS if field not in frame.columns]
        if missing:
            raise SchemaMismatchError(f"Missing catalog columns: {missing}", column=missing[0])

        frame = frame[list(CATALOG_FIELDS)].copy()
        for field in CATALOG_FIELDS:
            frame[field] = _normalize_text(frame[field])

        for field in REQUIRED_FIELDS:
            nulls = frame[field].isna()
            if nulls.any():
                show_ids = frame.loc[nulls, 'show_id'].tolist()
                raise SchemaMismatchError(
                    f"Required field '{field}' is empty in {int(nulls.sum())} rows",
                    column=field,
                    show_ids=show_ids,
                )

        duplicated = frame['show_id'].duplicated(keep=False)
        if duplicated.any():
            show_ids = sorted(set(frame.loc[duplicated, 'show_id']))
            raise SchemaMismatchError(
                f"show_id is not unique: {show_ids}",
                column='show_id',
                show_ids=show_ids,
            )

        years = pd.to_numeric(frame['release_year'].str.strip(), errors='coerce')
        invalid = years.isna() | (years % 1 != 0)
        if invalid.any():
            bad_rows = frame.loc[invalid, ['show_id', 'release_year']]
            raise SchemaMismatchError(
                f"release_year is not an integer for {len(bad_rows)} rows "
                f"(first: {bad_rows.iloc[0].to_dict()})",
                column='release_year',
                show_ids=bad_rows['show_id'].tolist(),
            )
        frame['release_year'] = years.astype(int)

        frame = frame.reset_index(drop=True)
        self._log_data_quality(frame)

        return frame

    def _log_data_quality(self, frame: pd.DataFrame) -> None:
        logger.info(f"✓ Prepared {len(frame)} catalog titles")
        if len(frame) == 0:
            logger.warning("Catalog is empty")
            return

        for field in ('director', 'casts', 'country', 'date_added', 'rating', 'duration'):
            present = int(frame[field].notna().sum())
            logger.info(f"  {field}: {present} titles ({present / len(frame) * 100:.1f}%)")
