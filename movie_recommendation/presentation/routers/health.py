from typing import Annotated

from fastapi import APIRouter, Depends

from movie_recommendation.applications.interfaces.dtos.recommendation import HealthResponse
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)
from movie_recommendation.infrastructure.config.dependencies import get_recommendation_index

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(index: Annotated[RecommendationIndexRepository, Depends(get_recommendation_index)]):
    """Health check endpoint for the recommendation service"""
    return HealthResponse(status="healthy", service="movie-recommendation", known_movies=len(index))
