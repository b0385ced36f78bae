from typing import List

from movie_recommendation.domain.models.movie import EnrichedRecommendation, MovieMetadata
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)
from movie_recommendation.domain.ports.services.logger import LoggerPort
from movie_recommendation.domain.ports.services.metadata_client import MetadataClientPort
from movie_recommendation.domain.ports.services.movie_recommendation_service_port import (
    MovieRecommendationServicePort,
)
from movie_recommendation.domain.services.enrichment_fanout import DEFAULT_MAX_CONCURRENCY, EnrichmentFanoutService
from movie_recommendation.domain.services.search_filter import SearchFilter


class MovieRecommendationService(MovieRecommendationServicePort):
    """Application service combining title search and recommendation enrichment"""

    def __init__(
        self,
        index: RecommendationIndexRepository,
        metadata_client: MetadataClientPort,
        logger: LoggerPort,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self.metadata_client = metadata_client
        self.logger = logger
        self.search_filter = SearchFilter(index)
        self.fanout = EnrichmentFanoutService(
            index=index, metadata_client=metadata_client, logger=logger, max_concurrency=max_concurrency
        )

    async def search(self, query: str) -> List[MovieMetadata]:
        results = await self.metadata_client.search_by_title(query)
        known = self.search_filter.filter_known(results)
        self.logger.info(f"Search {query!r}: {len(known)} of {len(results)} results have recommendations")
        return known

    async def get_enriched(self, movie_id: int) -> EnrichedRecommendation:
        self.logger.info(f"Resolving recommendations for movie: {movie_id}")
        return await self.fanout.resolve(movie_id)
