"""Repository for the flat catalog table."""

import logging

from sqlalchemy.orm import Session

from netflix_content_analytics.models import CATALOG_FIELDS, CatalogTitle

logger = logging.getLogger(__name__)


class CatalogRepository:
    """
    Repository for reading and (re)loading catalog titles.
    """

    def __init__(self, db: Session):
        self.db = db

    def replace_all(self, records: list[dict], batch_size: int = 500) -> int:
        """
        Replace the table contents with the given records.

        The delete and every insert batch run in one transaction, so a
        failed insert leaves the previous contents in place.

        Args:
            records: List of dicts keyed by catalog field name
            batch_size: Batch size for inserts

        Returns:
            Number of titles stored
        """
        titles = [
            CatalogTitle(position=position, **{field: record.get(field) for field in CATALOG_FIELDS})
            for position, record in enumerate(records)
        ]

        count = 0
        try:
            logger.info("Clearing existing catalog titles...")
            self.db.query(CatalogTitle).delete()

            for i in range(0, len(titles), batch_size):
                batch = titles[i : i + batch_size]
                self.db.bulk_save_objects(batch)
                self.db.flush()
                count += len(batch)

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error("Catalog replace failed; previous titles kept")
            raise

        logger.info(f"✓ Stored {count} catalog titles")
        return count

    def get_title(self, show_id: str) -> CatalogTitle | None:
        """Get a catalog title by show ID."""
        return self.db.query(CatalogTitle).filter(CatalogTitle.show_id == show_id).first()

    # noinspection PyTypeChecker
    def get_all_titles(self) -> list[CatalogTitle]:
        """Get all titles in load order."""
        return self.db.query(CatalogTitle).order_by(CatalogTitle.position).all()

    def to_records(self) -> list[dict]:
        """Get all titles as dicts keyed by catalog field name, in load order."""
        return [title.to_dict() for title in self.get_all_titles()]

    def count_titles(self) -> int:
        """Count stored titles."""
        return self.db.query(CatalogTitle).count()
