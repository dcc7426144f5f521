"""Service classes"""

from .catalog_loader_service import CatalogDataLoader
from .report_service import CatalogReportService, REPORTS

__all__ = ["CatalogDataLoader", "CatalogReportService", "REPORTS"]
