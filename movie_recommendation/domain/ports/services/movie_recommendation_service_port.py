from abc import ABC, abstractmethod
from typing import List

from movie_recommendation.domain.models.movie import EnrichedRecommendation, MovieMetadata


class MovieRecommendationServicePort(ABC):
    """Port for the operations exposed to the presentation layer"""

    @abstractmethod
    async def search(self, query: str) -> List[MovieMetadata]:
        """Search movies by title, keeping only those with recommendations"""
        pass

    @abstractmethod
    async def get_enriched(self, movie_id: int) -> EnrichedRecommendation:
        """Get a movie and the metadata of its recommendations"""
        pass
