import pytest
from fastapi.testclient import TestClient
from weather_query.app import app
from weather_query.services import DatasetStore, get_store

# Deliberately out of date order; the store sorts on load.
SAMPLE_CSV = """date,precipitation,temp_max,temp_min,wind,weather
2012-11-30,35.6,15.0,7.8,4.6,rain
2012-01-01,0.0,12.8,5.0,4.7,drizzle
2012-01-02,10.9,10.6,2.8,4.5,rain
2012-01-08,0.0,10.0,2.8,2.0,sun
2012-01-14,4.1,4.4,0.6,5.3,snow
2012-01-15,5.3,1.1,-3.3,3.2,snow
2012-01-16,2.5,1.7,-2.8,5.0,snow

2012-01-17,8.1,3.3,0.0,5.6,snow
2012-01-18,19.8,0.0,-2.8,5.0,snow
2012-01-19,15.2,-1.1,-2.8,1.6,snow
2012-01-20,13.5,7.2,-1.1,2.3,snow
2012-02-01,13.5,8.9,3.3,2.7,rain
2012-12-01,4.3,9.4,5.0,3.4,fog
"""

SAMPLE_SIZE = 13


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def store() -> DatasetStore:
    """Small in-memory store built from SAMPLE_CSV."""
    return DatasetStore.from_csv(SAMPLE_CSV)


@pytest.fixture
def client(store):
    """TestClient whose /query endpoint reads from the sample store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
