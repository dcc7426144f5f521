"""SQLAlchemy models"""

from netflix_content_analytics.models.base import Base
from netflix_content_analytics.models.catalog_title import CATALOG_FIELDS, CatalogTitle

__all__ = [
    "Base",
    "CATALOG_FIELDS",
    "CatalogTitle",
]
