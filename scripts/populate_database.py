"""
Populate the database with the catalog CSV.
This script validates the dataset and (re)creates the flat `netflix` table from it.
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import logging
import argparse

import numpy as np
import pandas as pd

from netflix_content_analytics.services import CatalogDataLoader

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def clean_dataframe_for_db(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean DataFrame by replacing NaN/NA values with None for database compatibility.

    Args:
        df: Input DataFrame

    Returns:
        Cleaned DataFrame
    """
    df = df.astype(object)
    df = df.replace({np.nan: None, pd.NA: None})
    df = df.where(pd.notnull(df), None)

    return df


def load_catalog(input_path: Path) -> pd.DataFrame:
    """
    Load and validate the catalog CSV.

    Args:
        input_path: Path to the catalog CSV

    Returns:
        Validated catalog DataFrame
    """
    logger.info("="*70)
    logger.info("LOADING CATALOG")
    logger.info("="*70)

    return CatalogDataLoader(input_path).load_csv()


def store_catalog(catalog: pd.DataFrame, batch_size: int = 500) -> int:
    """
    Replace the contents of the catalog table.

    Args:
        catalog: Validated catalog DataFrame
        batch_size: Rows per insert batch

    Returns:
        Number of titles stored
    """
    logger.info("="*70)
    logger.info("STORING CATALOG IN DATABASE")
    logger.info("="*70)

    from netflix_content_analytics.models.database import SessionLocal, init_db
    from netflix_content_analytics.repos import CatalogRepository

    init_db()

    records = clean_dataframe_for_db(catalog).to_dict('records')

    db = SessionLocal()
    try:
        count = CatalogRepository(db).replace_all(records, batch_size=batch_size)
    finally:
        db.close()

    return count


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description='Load the catalog CSV into the database'
    )
    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='Catalog CSV path (default: from config)'
    )
    parser.add_argument(
        '--batch-size',
        type=int,
        default=500,
        help='Rows per insert batch (default: 500)'
    )

    args = parser.parse_args()

    logger.info("="*70)
    logger.info("POPULATE DATABASE")
    logger.info("="*70)
    logger.info(f"Input: {args.input or 'from config'}")
    logger.info(f"Batch size: {args.batch_size}")

    try:
        catalog = load_catalog(Path(args.input) if args.input else None)
        count = store_catalog(catalog, batch_size=args.batch_size)

        logger.info("\n" + "="*70)
        logger.info("✓ DATABASE POPULATION COMPLETE")
        logger.info("="*70)
        logger.info(f"Stored {count} titles")

    except Exception as e:
        logger.error(f"Error during database population: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
