from typing import List

from pydantic import BaseModel

from movie_recommendation.domain.models.movie import MovieMetadata


class MovieSearchResponse(BaseModel):
    """Response schema for title search, restricted to movies with recommendations"""

    query: str
    results: List[MovieMetadata]
