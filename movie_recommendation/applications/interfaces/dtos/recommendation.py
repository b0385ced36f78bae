from typing import List

from pydantic import BaseModel

from movie_recommendation.domain.models.movie import MovieMetadata


class EnrichedRecommendationResponse(BaseModel):
    """Response schema for a movie and its recommended movies"""

    movie: MovieMetadata
    recommendations: List[MovieMetadata]


class HealthResponse(BaseModel):
    status: str
    service: str
    known_movies: int
