"""netflix_content_analytics/models/database.py"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from netflix_content_analytics.config import get_database_url
from netflix_content_analytics.models.base import Base

# Get database URL
DATABASE_URL = get_database_url()

# Validate database URL is provided
if DATABASE_URL is None:
    raise ValueError("DATABASE_URL is not configured. Set the DATABASE_URL environment variable.")

# Create engine
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False  # Set to True for SQL debugging
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create the catalog table if it does not exist"""
    Base.metadata.create_all(bind or engine)

