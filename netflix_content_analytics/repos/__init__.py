"""Repository classes"""

from netflix_content_analytics.repos.catalog_repository import CatalogRepository

__all__ = [
    "CatalogRepository",
]
