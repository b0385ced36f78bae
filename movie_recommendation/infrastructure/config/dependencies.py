from typing import Annotated

from fastapi import Depends, Request

from movie_recommendation.applications.services.movie_recommendation_service import MovieRecommendationService
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)
from movie_recommendation.domain.ports.services.logger import LoggerPort
from movie_recommendation.domain.ports.services.metadata_client import MetadataClientPort
from movie_recommendation.domain.ports.services.movie_recommendation_service_port import (
    MovieRecommendationServicePort,
)
from movie_recommendation.domain.services.enrichment_fanout import DEFAULT_MAX_CONCURRENCY
from movie_recommendation.infrastructure.adapters.repositories.json_recommendation_index_repository import (
    JsonRecommendationIndexRepository,
)
from movie_recommendation.infrastructure.adapters.services.tmdb_metadata_client import TMDBMetadataClient
from movie_recommendation.infrastructure.config.settings import Settings
from movie_recommendation.infrastructure.logging.logger import StdLoggerAdapter


def get_logger() -> LoggerPort:
    return StdLoggerAdapter("movie_recommendation.recommendations")


def get_settings() -> Settings:
    return Settings()


def build_recommendation_index(settings: Settings) -> RecommendationIndexRepository:
    return JsonRecommendationIndexRepository.from_path(settings.RECOMMENDATIONS_PATH)


def build_metadata_client(settings: Settings) -> TMDBMetadataClient:
    return TMDBMetadataClient(
        api_key=settings.MOVIE_API_KEY,
        base_url=settings.MOVIE_API_BASE_URL,
        timeout=settings.MOVIE_API_TIMEOUT_SECONDS,
    )


def get_recommendation_index(request: Request) -> RecommendationIndexRepository:
    return request.app.state.recommendation_index


def get_metadata_client(request: Request) -> MetadataClientPort:
    return request.app.state.metadata_client


def get_max_concurrency(request: Request) -> int:
    return getattr(request.app.state, "max_concurrency", DEFAULT_MAX_CONCURRENCY)


def get_movie_recommendation_service(
    index: Annotated[RecommendationIndexRepository, Depends(get_recommendation_index)],
    metadata_client: Annotated[MetadataClientPort, Depends(get_metadata_client)],
    max_concurrency: Annotated[int, Depends(get_max_concurrency)],
    logger: Annotated[LoggerPort, Depends(get_logger)],
) -> MovieRecommendationServicePort:
    return MovieRecommendationService(
        index=index,
        metadata_client=metadata_client,
        logger=logger,
        max_concurrency=max_concurrency,
    )
