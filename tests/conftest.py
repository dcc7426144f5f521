"""Shared test fixtures and configuration for pytest."""
import pytest
import pandas as pd
from pathlib import Path
from typing import Dict, List
import tempfile
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from netflix_content_analytics.models.base import Base
from netflix_content_analytics.models.catalog_title import CatalogTitle  # noqa: F401  (registers table)
from netflix_content_analytics.services.catalog_loader_service import CatalogDataLoader


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a database session for testing."""
    SessionLocal = sessionmaker(bind=test_db_engine)
    session = SessionLocal()
    yield session
    session.close()


# ===== Sample Data Fixtures =====

def make_record(**overrides) -> Dict:
    """Build a valid catalog record, overriding selected fields."""
    record = {
        'show_id': 's100',
        'content_type': 'Movie',
        'title': 'Untitled',
        'director': None,
        'casts': None,
        'country': None,
        'date_added': 'January 1, 2020',
        'release_year': 2020,
        'rating': 'TV-MA',
        'duration': '90 min',
        'listed_in': 'Dramas',
        'description': 'A story.',
    }
    record.update(overrides)
    return record


@pytest.fixture
def record_factory():
    """Factory for single catalog records."""
    return make_record


@pytest.fixture
def sample_catalog_records() -> List[Dict]:
    """Ten catalog entries covering movies, TV shows and malformed values."""
    return [
        {
            'show_id': 's1',
            'content_type': 'Movie',
            'title': 'Dick Johnson Is Dead',
            'director': 'Kirsten Johnson',
            'casts': None,
            'country': 'United States',
            'date_added': 'September 25, 2021',
            'release_year': 2020,
            'rating': 'PG-13',
            'duration': '90 min',
            'listed_in': 'Documentaries',
            'description': 'As her father nears the end of his life, filmmaker Kirsten Johnson '
                           'stages his death in inventive and comical ways.',
        },
        {
            'show_id': 's2',
            'content_type': 'TV Show',
            'title': 'Blood & Water',
            'director': None,
            'casts': 'Ama Qamata, Khosi Ngema, Gail Mabalane',
            'country': 'South Africa',
            'date_added': 'September 24, 2021',
            'release_year': 2021,
            'rating': 'TV-MA',
            'duration': '2 Seasons',
            'listed_in': 'International TV Shows, TV Dramas, TV Mysteries',
            'description': 'After crossing paths at a party, a Cape Town teen sets out to prove '
                           'whether a private-school swimming star is her sister.',
        },
        {
            'show_id': 's3',
            'content_type': 'TV Show',
            'title': 'Ganglands',
            'director': 'Julien Leclercq',
            'casts': 'Sami Bouajila, Tracy Gotoas',
            'country': None,
            'date_added': 'September 24, 2021',
            'release_year': 2021,
            'rating': 'TV-MA',
            'duration': '1 Season',
            'listed_in': 'Crime TV Shows, International TV Shows, TV Action & Adventure',
            'description': 'To protect his family, skilled thief Mehdi is pulled into a turf war '
                           'full of Violence.',
        },
        {
            'show_id': 's4',
            'content_type': 'Movie',
            'title': '3 Idiots',
            'director': 'Rajkumar Hirani',
            'casts': 'Aamir Khan, Kareena Kapoor, R. Madhavan',
            'country': 'India',
            'date_added': 'August 1, 2019',
            'release_year': 2009,
            'rating': 'TV-14',
            'duration': '164 min',
            'listed_in': 'Comedies, Dramas, International Movies',
            'description': 'While attending one of India\'s premier colleges, three students '
                           'make a pact.',
        },
        {
            'show_id': 's5',
            'content_type': 'Movie',
            'title': 'Mighty Little Bheem: Kite Festival',
            'director': 'Suhas Kadav',
            'casts': 'Julie Tejwani, Mousam',
            'country': 'India',
            'date_added': 'June 1, 2021',
            'release_year': 2021,
            'rating': 'TV-Y',
            'duration': '65 min',
            'listed_in': 'Children & Family Movies',
            'description': 'Bheem and his friends fly kites across the town.',
        },
        {
            'show_id': 's6',
            'content_type': 'Movie',
            'title': 'Lagaan',
            'director': 'Ashutosh Gowariker',
            'casts': 'Aamir Khan, Gracy Singh',
            'country': 'India, United Kingdom',
            'date_added': 'December 31, 2019',
            'release_year': 2001,
            'rating': 'PG',
            'duration': '224 min',
            'listed_in': 'Dramas, International Movies, Sports Movies',
            'description': 'In 1890s India, an arrogant British commander challenges villagers '
                           'to a game of cricket.',
        },
        {
            'show_id': 's7',
            'content_type': 'TV Show',
            'title': 'The Crown',
            'director': None,
            'casts': 'Claire Foy, Matt Smith',
            'country': 'United Kingdom',
            'date_added': 'November 4, 2016',
            'release_year': 2020,
            'rating': 'TV-MA',
            'duration': '4 Seasons',
            'listed_in': 'British TV Shows, International TV Shows, TV Dramas',
            'description': 'This drama follows the political rivalries and romance of '
                           'Queen Elizabeth II\'s reign.',
        },
        {
            'show_id': 's8',
            'content_type': 'Movie',
            'title': 'Chhota Bheem: Kung Fu Dhamaka',
            'director': 'Rajiv Chilaka, Suhas Kadav',
            'casts': 'Vatsal Dubey, Julie Tejwani',
            'country': 'India',
            'date_added': '2019-05-01',
            'release_year': 2019,
            'rating': 'TV-Y7',
            'duration': '66 min',
            'listed_in': 'Children & Family Movies, Comedies',
            'description': 'Bheem and friends travel to China to help the Emperor fight off '
                           'warriors out to kill him.',
        },
        {
            'show_id': 's9',
            'content_type': 'Movie',
            'title': 'Louis C.K. 2017',
            'director': 'Louis C.K.',
            'casts': 'Louis C.K.',
            'country': 'United States',
            'date_added': 'April 4, 2017',
            'release_year': 2017,
            'rating': '74 min',
            'duration': None,
            'listed_in': 'Movies',
            'description': 'Louis C.K. muses on religion, eternal love and more in a live '
                           'performance.',
        },
        {
            'show_id': 's10',
            'content_type': 'Movie',
            'title': 'The Social Dilemma',
            'director': 'Jeff Orlowski',
            'casts': None,
            'country': 'United States',
            'date_added': 'September 9, 2020',
            'release_year': 2020,
            'rating': 'PG-13',
            'duration': '94 min',
            'listed_in': 'Documentaries, International Movies',
            'description': 'Tech experts sound the alarm on the dangerous human impact of '
                           'social networking.',
        },
    ]


@pytest.fixture
def catalog_loader() -> CatalogDataLoader:
    """Loader pointed at a path that is never read."""
    return CatalogDataLoader(dataset_path='unused.csv')


@pytest.fixture
def sample_catalog_df(catalog_loader, sample_catalog_records) -> pd.DataFrame:
    """Validated catalog DataFrame built from the sample records."""
    return catalog_loader.load_records(sample_catalog_records)


@pytest.fixture
def build_catalog(catalog_loader):
    """Build a validated catalog from record overrides."""
    def _build(*records: Dict) -> pd.DataFrame:
        return catalog_loader.load_records([make_record(**r) for r in records])
    return _build


# ===== Temporary Directory Fixtures =====

@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_catalog_csv(temp_data_dir, sample_catalog_records) -> Path:
    """Write the sample records as netflix_titles.csv using the published column names."""
    df = pd.DataFrame(sample_catalog_records).rename(
        columns={'content_type': 'type', 'casts': 'cast'}
    )
    csv_path = temp_data_dir / 'netflix_titles.csv'
    df.to_csv(csv_path, index=False)
    yield csv_path


# ===== Configuration Fixtures =====

@pytest.fixture
def clean_config(monkeypatch):
    """Remove configuration environment variables."""
    for key in (
        'NETFLIX_DATASET_PATH',
        'DATABASE_URL',
        'RECENT_WINDOW_YEARS',
        'MIN_SEASONS',
        'TOP_ACTORS_LIMIT',
        'CLASSIFICATION_KEYWORDS',
        'PARSE_ERROR_POLICY',
        'USE_DATABASE',
    ):
        monkeypatch.delenv(key, raising=False)
