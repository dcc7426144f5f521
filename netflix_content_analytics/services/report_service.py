"""Service that runs catalog reports against one loaded snapshot."""
import inspect
from pathlib import Path
from typing import Dict, Iterable, Optional
import logging

import pandas as pd

from netflix_content_analytics.analytics import queries
from netflix_content_analytics.config import (
    get_classification_keywords,
    get_min_seasons,
    get_parse_error_policy,
    get_recent_window_years,
    get_top_actors_limit,
    use_database,
)
from netflix_content_analytics.services.catalog_loader_service import CatalogDataLoader

logger = logging.getLogger(__name__)

REPORTS = {
    'count_by_type': queries.count_by_type,
    'top_rating_by_type': queries.top_rating_by_type,
    'filter_by_release_year': queries.filter_by_release_year,
    'top_countries_by_content': queries.top_countries_by_content,
    'longest_movies': queries.longest_movies,
    'recently_added': queries.recently_added,
    'by_director': queries.by_director,
    'tv_shows_min_seasons': queries.tv_shows_min_seasons,
    'genre_counts': queries.genre_counts,
    'top_years_by_country_share': queries.top_years_by_country_share,
    'documentary_movies': queries.documentary_movies,
    'missing_director': queries.missing_director,
    'by_cast_member': queries.by_cast_member,
    'top_actors_by_country': queries.top_actors_by_country,
    'keyword_classification': queries.keyword_classification,
}


# noinspection PyMethodMayBeStatic
class CatalogReportService:
    """
    Service for catalog reports.
    Loads the catalog once (lazily) and runs any subset of reports on it.
    """

    def __init__(
            self,
            dataset_path: Optional[Path] = None,
            use_db: Optional[bool] = None,
            catalog: Optional[pd.DataFrame] = None
    ):
        """
        Initialize the report service.

        Args:
            dataset_path: Catalog CSV (default: from config)
            use_db: Read the catalog from the database (None = from config)
            catalog: Already-loaded catalog; skips loading entirely
        """
        self.loader = CatalogDataLoader(dataset_path)
        self.use_db = use_database() if use_db is None else use_db
        self._catalog = catalog

        source = 'database' if self.use_db else self.loader.dataset_path
        logger.info(f"Initialized CatalogReportService (source: {source})")

    @property
    def catalog(self) -> pd.DataFrame:
        """The loaded catalog snapshot."""
        self._load_catalog()
        return self._catalog

    def _load_catalog(self):
        if self._catalog is not None:
            return  # Already loaded

        if self.use_db:
            from netflix_content_analytics.models.database import SessionLocal

            db = SessionLocal()
            try:
                self._catalog = self.loader.load_from_database(db)
            finally:
                db.close()
        else:
            self._catalog = self.loader.load_csv()

    def available_reports(self) -> list[str]:
        """Names of all reports."""
        return sorted(REPORTS)

    def default_parameters(self) -> Dict[str, object]:
        """
        Report parameters taken from configuration.

        Returns:
            Dict with years, min_seasons, keywords and on_error
        """
        return {
            'years': get_recent_window_years(),
            'min_seasons': get_min_seasons(),
            'keywords': get_classification_keywords(),
            'on_error': get_parse_error_policy(),
        }

    def run_report(self, name: str, **params) -> pd.DataFrame:
        """
        Run one report.

        Args:
            name: Report name (see available_reports)
            **params: Keyword arguments for the report function

        Returns:
            Report result
        """
        if name not in REPORTS:
            raise KeyError(f"Unknown report {name!r}. Available: {', '.join(self.available_reports())}")

        logger.info(f"Running report {name} {params or ''}".rstrip())
        result = REPORTS[name](self.catalog, **params)
        logger.info(f"✓ {name}: {len(result)} rows")
        return result

    def run_reports(
            self,
            names: Iterable[str],
            params: Optional[Dict[str, object]] = None,
            overrides: Optional[Dict[str, Dict[str, object]]] = None
    ) -> Dict[str, pd.DataFrame]:
        """
        Run several reports, giving each only the parameters it accepts.

        Args:
            names: Report names
            params: Shared parameters (defaults from configuration)
            overrides: Per-report parameters, e.g. {'top_actors_by_country': {'limit': 5}}

        Returns:
            Dict of report name -> result
        """
        shared = {**self.default_parameters(), **(params or {})}
        per_report = {'top_actors_by_country': {'limit': get_top_actors_limit()}}
        for name, report_overrides in (overrides or {}).items():
            per_report[name] = {**per_report.get(name, {}), **report_overrides}

        results = {}
        for name in names:
            if name not in REPORTS:
                raise KeyError(f"Unknown report {name!r}. Available: {', '.join(self.available_reports())}")

            report_params = self._select_parameters(name, {**shared, **per_report.get(name, {})})
            results[name] = self.run_report(name, **report_params)

        return results

    def _select_parameters(self, name: str, params: Dict[str, object]) -> Dict[str, object]:
        """Keep the parameters the report accepts; fail on missing required ones."""
        signature = inspect.signature(REPORTS[name])
        accepted = list(signature.parameters.values())[1:]  # first is the catalog

        selected = {}
        for parameter in accepted:
            value = params.get(parameter.name)
            if value is not None:
                selected[parameter.name] = value
            elif parameter.default is inspect.Parameter.empty:
                raise ValueError(f"Report {name!r} requires parameter {parameter.name!r}")

        return selected
