"""
Run catalog reports and optionally export each result to CSV.

Usage:
    # Run every report against the configured CSV
    python scripts/run_reports.py

    # Run specific reports against the database
    python scripts/run_reports.py --from-db --reports count_by_type,genre_counts

    # Run with custom parameters and save results
    python scripts/run_reports.py --country "United States" --output-dir data/reports
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import logging
import argparse
from typing import Dict

import pandas as pd

from netflix_content_analytics.services import CatalogReportService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def parse_report_names(value: str, available: list[str]) -> list[str]:
    """
    Parse the --reports argument.

    Args:
        value: 'all' or comma-separated report names
        available: Valid report names

    Returns:
        Report names in the order given
    """
    if value.strip().lower() == 'all':
        return list(available)

    names = [name.strip().lower() for name in value.split(',') if name.strip()]
    invalid = [name for name in names if name not in available]
    if invalid:
        raise ValueError(f"Invalid reports: {invalid}. Valid reports: {available}")
    return names


def build_parameters(args: argparse.Namespace) -> tuple[dict, dict]:
    """
    Turn CLI arguments into shared and per-report parameters.

    Unset options are left out so configuration defaults apply.

    Returns:
        (params, overrides) tuple for CatalogReportService.run_reports
    """
    params = {
        'year': args.year,
        'director': args.director,
        'actor': args.actor,
        'country': args.country,
        'min_release_year': args.min_release_year,
        'years': args.window_years,
        'min_seasons': args.min_seasons,
        'on_error': args.on_error,
    }
    if args.keywords:
        params['keywords'] = tuple(k.strip() for k in args.keywords.split(',') if k.strip())

    overrides = {}
    if args.actor_limit is not None:
        overrides['top_actors_by_country'] = {'limit': args.actor_limit}
    if args.top_movies is not None:
        overrides['longest_movies'] = {'limit': args.top_movies}

    return {k: v for k, v in params.items() if v is not None}, overrides


def save_results(results: Dict[str, pd.DataFrame], output_dir: Path):
    """
    Save each report result to <output_dir>/<report>.csv.

    Args:
        results: Report name -> result
        output_dir: Output directory
    """
    logger.info("="*70)
    logger.info("SAVING REPORTS")
    logger.info("="*70)

    output_dir.mkdir(parents=True, exist_ok=True)

    for name, result in results.items():
        output_path = output_dir / f'{name}.csv'
        result.to_csv(output_path, index=False)
        logger.info(f"✓ Saved {len(result)} rows to {output_path}")


def log_results(results: Dict[str, pd.DataFrame], preview_rows: int = 10):
    """Log a preview of each report."""
    for name, result in results.items():
        logger.info("\n" + "="*70)
        logger.info(name.upper().replace('_', ' '))
        logger.info("="*70)
        if result.empty:
            logger.info("(no rows)")
        else:
            logger.info("\n" + result.head(preview_rows).to_string(index=False))

        skipped = result.attrs.get('skipped_show_ids')
        if skipped:
            logger.warning(f"{len(skipped)} titles skipped due to unparseable values")


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description='Run catalog reports'
    )
    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='Catalog CSV path (default: from config)'
    )
    parser.add_argument(
        '--from-db',
        action='store_true',
        help='Read the catalog from the database instead of the CSV'
    )
    parser.add_argument(
        '--reports',
        type=str,
        default='all',
        help='Comma-separated report names, or all (default: all)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Directory to write one CSV per report (default: no export)'
    )

    # Report parameters
    parser.add_argument('--year', type=int, default=2020,
                        help='Release year to list (default: 2020)')
    parser.add_argument('--director', type=str, default='Suhas Kadav',
                        help='Director to list titles for (default: Suhas Kadav)')
    parser.add_argument('--actor', type=str, default='Aamir Khan',
                        help='Cast member to search for (default: Aamir Khan)')
    parser.add_argument('--min-release-year', type=int, default=None,
                        help='Only count cast-member titles released in or after this year')
    parser.add_argument('--country', type=str, default='India',
                        help='Country for per-country reports (default: India)')
    parser.add_argument('--window-years', type=int, default=None,
                        help='Recently-added window in years (default: from config)')
    parser.add_argument('--min-seasons', type=int, default=None,
                        help='Season threshold for TV shows (default: from config)')
    parser.add_argument('--actor-limit', type=int, default=None,
                        help='Number of actors per country (default: from config)')
    parser.add_argument('--top-movies', type=int, default=None,
                        help='Number of longest movies to keep (default: all)')
    parser.add_argument('--keywords', type=str, default=None,
                        help='Comma-separated classification keywords (default: from config)')
    parser.add_argument('--on-error', choices=['skip', 'raise'], default=None,
                        help='Policy for unparseable durations/dates (default: from config)')

    args = parser.parse_args()

    logger.info("="*70)
    logger.info("CATALOG REPORTS")
    logger.info("="*70)

    try:
        service = CatalogReportService(
            dataset_path=Path(args.input) if args.input else None,
            use_db=True if args.from_db else None
        )
        names = parse_report_names(args.reports, service.available_reports())
        params, overrides = build_parameters(args)

        logger.info(f"Reports to run: {', '.join(names)}")

        results = service.run_reports(names, params=params, overrides=overrides)
        log_results(results)

        if args.output_dir:
            save_results(results, project_root / args.output_dir)

        logger.info("\n" + "="*70)
        logger.info(f"✓ {len(results)} REPORTS COMPLETE")
        logger.info("="*70)

    except Exception as e:
        logger.error(f"Error running reports: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
