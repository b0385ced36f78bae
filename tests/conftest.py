from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from movie_recommendation.app import app
from movie_recommendation.domain.exceptions import MovieNotFoundRemoteError
from movie_recommendation.domain.ports.services.logger import LoggerPort
from movie_recommendation.domain.ports.services.metadata_client import MetadataClientPort
from movie_recommendation.infrastructure.config.dependencies import (
    get_max_concurrency,
    get_metadata_client,
    get_recommendation_index,
)
from factories import IndexFactory, MovieFactory

SAMPLE_RECOMMENDATIONS = {
    550: [551, 0, 552],
    551: [],
    552: [0, 0, 0],
    600: [101, 0, 202],
    700: [101, 202],
}


@pytest.fixture
def movie_factory():
    return MovieFactory()


@pytest.fixture
def index_factory():
    return IndexFactory()


@pytest.fixture
def recommendation_index(index_factory):
    """In-memory index built from SAMPLE_RECOMMENDATIONS"""
    return index_factory.create(SAMPLE_RECOMMENDATIONS)


@pytest.fixture
def mock_logger():
    return Mock(spec=LoggerPort)


@pytest.fixture
def catalog(movie_factory):
    """Provider records keyed by id; tests may add or remove entries"""
    return {movie_id: movie_factory.create_metadata(movie_id) for movie_id in (550, 551, 552, 600, 700, 101, 202, 603)}


@pytest.fixture
def mock_metadata_client(catalog):
    """Metadata client double serving from ``catalog``.

    Values in ``catalog`` that are exceptions are raised instead of returned.
    """
    client = AsyncMock(spec=MetadataClientPort)

    async def fetch_by_id(movie_id):
        if movie_id not in catalog:
            raise MovieNotFoundRemoteError(f"Provider has no record for movie {movie_id}")
        value = catalog[movie_id]
        if isinstance(value, Exception):
            raise value
        return value

    client.fetch_by_id.side_effect = fetch_by_id
    client.search_by_title.return_value = []
    return client


@pytest.fixture
def client(recommendation_index, mock_metadata_client):
    """Test client with the index and provider overridden; the lifespan is not run"""
    app.dependency_overrides[get_recommendation_index] = lambda: recommendation_index
    app.dependency_overrides[get_metadata_client] = lambda: mock_metadata_client
    app.dependency_overrides[get_max_concurrency] = lambda: 4

    yield TestClient(app)

    app.dependency_overrides.clear()
