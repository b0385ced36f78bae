from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from movie_recommendation.applications.interfaces.dtos.movie import MovieSearchResponse
from movie_recommendation.applications.interfaces.dtos.recommendation import EnrichedRecommendationResponse
from movie_recommendation.domain.exceptions import (
    MetadataProviderError,
    PrimaryLookupFailedError,
    RateLimitedError,
    UnknownMovieError,
)
from movie_recommendation.domain.ports.services.movie_recommendation_service_port import (
    MovieRecommendationServicePort,
)
from movie_recommendation.infrastructure.config.dependencies import get_movie_recommendation_service
from movie_recommendation.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)

router = APIRouter(tags=["movies"])

MovieRecommendationServiceDep = Annotated[
    MovieRecommendationServicePort, Depends(get_movie_recommendation_service)
]


@router.get("/search", response_model=MovieSearchResponse)
async def search_movies(service: MovieRecommendationServiceDep, query: str = Query("")):
    """Search movies by title, keeping only those we can recommend from"""
    try:
        results = await service.search(query)
    except RateLimitedError as e:
        logger.warning(f"Search rate limited: {e}")
        headers = {"Retry-After": str(int(e.retry_after))} if e.retry_after is not None else None
        raise HTTPException(status_code=HTTPStatus.TOO_MANY_REQUESTS, detail="Search is rate limited", headers=headers)
    except MetadataProviderError as e:
        logger.warning(f"Search failed for {query!r}: {e}")
        raise HTTPException(status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail="Movie search is unavailable")
    except Exception:
        logger.exception("Unhandled error searching movies")
        raise HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail="Internal server error")

    return MovieSearchResponse(query=query, results=results)


@router.get("/movies/{movie_id}", response_model=EnrichedRecommendationResponse)
async def read_movie_recommendations(
    movie_id: Annotated[int, Path(gt=0)], service: MovieRecommendationServiceDep
):
    """Get a movie with the metadata of its recommended movies"""
    try:
        enriched = await service.get_enriched(movie_id)
    except UnknownMovieError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))
    except PrimaryLookupFailedError:
        raise HTTPException(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail="Movie details are unavailable, try again later"
        )
    except Exception:
        logger.exception("Unhandled error resolving movie recommendations")
        raise HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail="Internal server error")

    return EnrichedRecommendationResponse(**enriched.model_dump())
