"""Flat catalog table of movies and TV shows"""
from sqlalchemy import Column, Integer, String

from netflix_content_analytics.models.base import Base

# Catalog columns in table order
CATALOG_FIELDS = (
    'show_id',
    'content_type',
    'title',
    'director',
    'casts',
    'country',
    'date_added',
    'release_year',
    'rating',
    'duration',
    'listed_in',
    'description',
)


class CatalogTitle(Base):
    """One catalog entry (movie or TV show).
    Mirrors the denormalized `netflix` table the reports run against.
    """
    __tablename__ = 'netflix'

    show_id = Column(String(5), primary_key=True)
    content_type = Column('type', String(10), nullable=False)
    title = Column(String(250), nullable=False)
    director = Column(String(600), nullable=True)
    casts = Column(String(1050), nullable=True)
    country = Column(String(550), nullable=True)
    date_added = Column(String(55), nullable=True)
    release_year = Column(Integer, nullable=False)
    rating = Column(String(15), nullable=True)
    duration = Column(String(15), nullable=True)
    listed_in = Column(String(250), nullable=False)
    description = Column(String(550), nullable=False)

    # Row position in the source file; keeps reads in load order
    position = Column(Integer, nullable=False, index=True)

    def to_dict(self) -> dict:
        """Return the entry keyed by catalog field name."""
        return {field: getattr(self, field) for field in CATALOG_FIELDS}

    def __repr__(self):
        return f"<CatalogTitle(show_id='{self.show_id}', title='{self.title}')>"
