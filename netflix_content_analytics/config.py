"""Application configuration"""

import json
import os
from pathlib import Path


PARSE_ERROR_POLICIES = ("skip", "raise")


def _get_config_value(key: str, default: str | None = None) -> str | None:
    """
    Get configuration value from environment or local.settings.json.

    Priority:
    1. Environment variable
    2. local.settings.json (Values.key)
    3. Default value

    Args:
        key: Configuration key name
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    value = os.getenv(key)
    if value:
        return value

    project_root = Path(__file__).resolve().parent.parent
    local_settings_path = project_root / "local.settings.json"

    if local_settings_path.exists():
        try:
            with open(local_settings_path) as f:
                settings = json.load(f)
                value = settings.get("Values", {}).get(key)
                if value:
                    return str(value)
        except (json.JSONDecodeError, KeyError):
            pass

    return default


def _get_int_value(key: str, default: int) -> int:
    """Get an integer configuration value, raising ValueError if malformed."""
    raw = _get_config_value(key, default=str(default))
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def get_dataset_path() -> str | None:
    """
    Get path to the catalog CSV file.

    Returns:
        Dataset path (default: data/raw/netflix_titles.csv)
    """
    return _get_config_value("NETFLIX_DATASET_PATH", default="data/raw/netflix_titles.csv")


def get_database_url() -> str | None:
    """
    Get database URL from environment or config.

    Returns:
        Database connection string
    """
    return _get_config_value("DATABASE_URL", default="sqlite:///netflix.db")


def get_recent_window_years() -> int:
    """Look-back window in years for recently added content (default: 5)."""
    return _get_int_value("RECENT_WINDOW_YEARS", 5)


def get_min_seasons() -> int:
    """Season threshold for long-running TV shows (default: 3)."""
    return _get_int_value("MIN_SEASONS", 3)


def get_top_actors_limit() -> int:
    """Number of actors returned per country (default: 10)."""
    return _get_int_value("TOP_ACTORS_LIMIT", 10)


def get_classification_keywords() -> tuple[str, ...]:
    """
    Get keywords that mark a description as mature content.

    Returns:
        Tuple of keywords (default: ('kill', 'violence'))
    """
    raw = _get_config_value("CLASSIFICATION_KEYWORDS", default="kill,violence")
    keywords = tuple(k.strip() for k in raw.split(",") if k.strip())
    if not keywords:
        raise ValueError("CLASSIFICATION_KEYWORDS must name at least one keyword")
    return keywords


def get_parse_error_policy() -> str:
    """
    Get the policy for per-record duration/date parse failures.

    Returns:
        'skip' (exclude and warn) or 'raise'
    """
    policy = _get_config_value("PARSE_ERROR_POLICY", default="skip").lower()
    if policy not in PARSE_ERROR_POLICIES:
        raise ValueError(
            f"PARSE_ERROR_POLICY must be one of {PARSE_ERROR_POLICIES}, got {policy!r}"
        )
    return policy


def use_database() -> bool:
    """
    Check if reports should read the catalog from the database (vs the CSV).

    Returns:
        True if the database should be used
    """
    flag = _get_config_value("USE_DATABASE")
    if flag is not None:
        return flag.lower() == "true"
    return False
