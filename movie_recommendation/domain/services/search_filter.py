from typing import List, Sequence

from movie_recommendation.domain.models.movie import MovieMetadata
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)


class SearchFilter:
    """Keeps only search results the index can recommend from"""

    def __init__(self, index: RecommendationIndexRepository):
        self.index = index

    def filter_known(self, results: Sequence[MovieMetadata]) -> List[MovieMetadata]:
        return [movie for movie in results if self.index.contains(movie.id)]
