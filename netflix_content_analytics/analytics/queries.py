"""Report queries over the loaded catalog.

Every function takes the catalog DataFrame produced by CatalogDataLoader,
never modifies it, and returns a new DataFrame. Aggregates are ordered by
count descending, then by key ascending; row filters keep load order.
"""
import logging
import re
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from netflix_content_analytics.analytics.field_expansion import expand_field, explode_field
from netflix_content_analytics.analytics.parsing import parse_column, parse_date_added, parse_duration

logger = logging.getLogger(__name__)

MOVIE = "Movie"
TV_SHOW = "TV Show"

DOCUMENTARY_SUFFIX = "Documentaries"

DEFAULT_KEYWORDS = ("kill", "violence")
# (label when any keyword matches, label otherwise)
DEFAULT_LABELS = ("A/R rated", "U/A Rated")


def _count_values(values: pd.Series, key: str, count_column: str = "total_content") -> pd.DataFrame:
    """Count occurrences of each value, ordered by count desc then value asc."""
    counts = values.value_counts().rename_axis(key).reset_index(name=count_column)
    return counts.sort_values(
        [count_column, key], ascending=[False, True], ignore_index=True
    )


def _rows(catalog: pd.DataFrame, mask) -> pd.DataFrame:
    return catalog[pd.Series(mask, index=catalog.index, dtype=bool)].reset_index(drop=True)


def count_by_type(catalog: pd.DataFrame) -> pd.DataFrame:
    """Number of titles per content type."""
    return _count_values(catalog["content_type"], "content_type")


def top_rating_by_type(catalog: pd.DataFrame) -> pd.DataFrame:
    """
    Most frequent rating for each content type.

    Ratings tied for the top count are all returned (RANK semantics).
    A null rating is counted as its own group.

    Returns:
        DataFrame with content_type, most_frequent_rating, rating_count
    """
    rating_counts = (
        catalog.groupby(["content_type", "rating"], dropna=False)
        .size()
        .reset_index(name="rating_count")
    )
    rating_counts["rank"] = (
        rating_counts.groupby("content_type")["rating_count"]
        .rank(method="min", ascending=False)
    )

    top = rating_counts[rating_counts["rank"] == 1].rename(columns={"rating": "most_frequent_rating"})
    return top[["content_type", "most_frequent_rating", "rating_count"]].sort_values(
        ["content_type", "most_frequent_rating"], na_position="last", ignore_index=True
    )


def filter_by_release_year(catalog: pd.DataFrame, year: int) -> pd.DataFrame:
    """Titles released in the given year."""
    return _rows(catalog, catalog["release_year"] == int(year))


def top_countries_by_content(catalog: pd.DataFrame, limit: int = 5) -> pd.DataFrame:
    """
    Countries with the most titles.

    Multi-country titles count once for each listed country. Ties at the
    cut-off are broken by country name.

    Returns:
        DataFrame with country, total_content (at most `limit` rows)
    """
    countries = explode_field(catalog, "country", "country_name")
    counts = _count_values(countries["country_name"], "country")
    return counts.head(limit)


def longest_movies(
    catalog: pd.DataFrame,
    limit: Optional[int] = None,
    on_error: str = "skip",
) -> pd.DataFrame:
    """
    Movies ordered by runtime, longest first.

    Args:
        catalog: Catalog DataFrame
        limit: Optional number of movies to keep
        on_error: 'skip' to drop movies with unparseable durations, 'raise' to fail

    Returns:
        Movie rows plus a duration_minutes column; skipped show IDs are in
        result.attrs['skipped_show_ids']
    """
    movies = catalog[catalog["content_type"] == MOVIE]
    minutes, skipped = parse_column(movies, "duration", parse_duration, on_error)

    result = movies.loc[minutes.index].assign(duration_minutes=minutes.astype(int))
    # Stable, so equal runtimes keep load order
    result = result.sort_values(
        "duration_minutes", ascending=False, kind="mergesort", ignore_index=True
    )
    if limit is not None:
        result = result.head(limit)

    result.attrs["skipped_show_ids"] = skipped
    return result


def recently_added(
    catalog: pd.DataFrame,
    years: int = 5,
    today: Optional[date] = None,
    on_error: str = "skip",
) -> pd.DataFrame:
    """
    Titles added within the last `years` years (inclusive of the cut-off day).

    Titles with a null or malformed date_added are excluded.
    """
    today = today or date.today()
    cutoff = (pd.Timestamp(today) - pd.DateOffset(years=years)).date()

    added, skipped = parse_column(catalog, "date_added", parse_date_added, on_error)
    recent_index = [index for index, added_on in added.items() if added_on >= cutoff]

    result = catalog.loc[recent_index].reset_index(drop=True)
    result.attrs["skipped_show_ids"] = skipped
    return result


def by_director(catalog: pd.DataFrame, director: str) -> pd.DataFrame:
    """Titles where `director` is one of the listed directors (exact, case-sensitive)."""
    mask = [
        director in expand_field(record, "director")
        for record in catalog[["director"]].to_dict("records")
    ]
    return _rows(catalog, mask)


def tv_shows_min_seasons(
    catalog: pd.DataFrame,
    min_seasons: int = 3,
    on_error: str = "skip",
) -> pd.DataFrame:
    """
    TV shows with strictly more than `min_seasons` seasons.

    Returns:
        TV show rows plus a season_count column, in load order
    """
    shows = catalog[catalog["content_type"] == TV_SHOW]
    seasons, skipped = parse_column(shows, "duration", parse_duration, on_error)

    result = shows.loc[seasons.index].assign(season_count=seasons.astype(int))
    result = result[result["season_count"] > min_seasons].reset_index(drop=True)

    result.attrs["skipped_show_ids"] = skipped
    return result


def genre_counts(catalog: pd.DataFrame) -> pd.DataFrame:
    """Number of titles per genre tag in listed_in."""
    genres = explode_field(catalog, "listed_in", "genre_name")
    return _count_values(genres["genre_name"], "genre")


def top_years_by_country_share(catalog: pd.DataFrame, country: str, limit: int = 5) -> pd.DataFrame:
    """
    Release years contributing the most titles for a country.

    Matches the raw country field exactly, so titles listing several
    countries (e.g. "India, United States") do not count towards "India".

    Returns:
        DataFrame with release_year, total_release and content_share
        (percent of the country's titles, 2 decimals), ordered by
        total_release desc then release_year desc
    """
    country_titles = catalog[catalog["country"] == country]
    total = len(country_titles)

    yearly = (
        country_titles["release_year"]
        .value_counts()
        .rename_axis("release_year")
        .reset_index(name="total_release")
    )
    yearly["content_share"] = (yearly["total_release"] / max(total, 1) * 100).round(2)

    yearly = yearly.sort_values(
        ["total_release", "release_year"], ascending=[False, False], ignore_index=True
    )
    return yearly.head(limit)


def documentary_movies(catalog: pd.DataFrame) -> pd.DataFrame:
    """Titles whose listed_in ends with "Documentaries"."""
    return _rows(catalog, catalog["listed_in"].str.endswith(DOCUMENTARY_SUFFIX, na=False))


def missing_director(catalog: pd.DataFrame) -> pd.DataFrame:
    """Titles without a director."""
    mask = catalog["director"].map(lambda value: pd.isna(value) or not str(value).strip())
    return _rows(catalog, mask)


def by_cast_member(
    catalog: pd.DataFrame,
    actor: str,
    min_release_year: Optional[int] = None,
) -> pd.DataFrame:
    """
    Titles whose cast text contains `actor` (case-sensitive substring).

    Args:
        catalog: Catalog DataFrame
        actor: Name or name fragment to look for
        min_release_year: Optional lower bound on release_year
    """
    mask = catalog["casts"].str.contains(actor, case=True, regex=False, na=False)
    if min_release_year is not None:
        mask = mask & (catalog["release_year"] >= min_release_year)
    return _rows(catalog, mask)


def top_actors_by_country(catalog: pd.DataFrame, country: str, limit: int = 10) -> pd.DataFrame:
    """
    Actors appearing in the most titles produced in `country`.

    Like top_years_by_country_share, the country is matched against the
    raw field; cast lists are expanded per actor.

    Returns:
        DataFrame with actor, total_content (at most `limit` rows)
    """
    country_titles = catalog[catalog["country"] == country]
    actors = explode_field(country_titles, "casts", "actor_name")
    return _count_values(actors["actor_name"], "actor").head(limit)


def classify_content(
    catalog: pd.DataFrame,
    keywords: Optional[Iterable[str]] = None,
    labels: Optional[Sequence[str]] = None,
) -> pd.Series:
    """
    Label each title by scanning its description for keywords.

    Args:
        catalog: Catalog DataFrame
        keywords: Keywords matched case-insensitively anywhere in the text;
            a single string is one keyword
        labels: (label when any keyword matches, label otherwise)

    Returns:
        Series named 'category', indexed like catalog
    """
    if keywords is None:
        keywords = DEFAULT_KEYWORDS
    elif isinstance(keywords, str):
        keywords = (keywords,)
    keywords = tuple(keywords)
    flagged_label, clean_label = _label_pair(DEFAULT_LABELS if labels is None else labels)
    if not keywords:
        raise ValueError("At least one keyword is required")

    pattern = "|".join(re.escape(keyword) for keyword in keywords)
    flagged = catalog["description"].str.contains(pattern, case=False, regex=True, na=False)

    return pd.Series(
        np.where(flagged, flagged_label, clean_label),
        index=catalog.index,
        name="category",
        dtype=object,
    )


def _label_pair(labels: Sequence[str]) -> Tuple[str, str]:
    if len(labels) != 2:
        raise ValueError(f"labels must be a (flagged, clean) pair, got {labels!r}")
    return labels[0], labels[1]


def keyword_classification(
    catalog: pd.DataFrame,
    keywords: Optional[Iterable[str]] = None,
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Count titles per keyword classification label.

    Returns:
        DataFrame with category, content_count ordered by category
    """
    categories = classify_content(catalog, keywords=keywords, labels=labels)
    counts = categories.value_counts().rename_axis("category").reset_index(name="content_count")
    return counts.sort_values("category", ignore_index=True)
