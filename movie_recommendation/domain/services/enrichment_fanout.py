import asyncio
from dataclasses import dataclass
from typing import List, Optional

from movie_recommendation.domain.exceptions import (
    MetadataProviderError,
    PrimaryLookupFailedError,
    UnknownMovieError,
)
from movie_recommendation.domain.models.movie import EnrichedRecommendation, MovieMetadata
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)
from movie_recommendation.domain.ports.services.logger import LoggerPort
from movie_recommendation.domain.ports.services.metadata_client import MetadataClientPort

DEFAULT_MAX_CONCURRENCY = 20


@dataclass(frozen=True)
class FetchOutcome:
    movie_id: int
    metadata: Optional[MovieMetadata] = None
    error: Optional[MetadataProviderError] = None

    @property
    def ok(self) -> bool:
        return self.metadata is not None


class EnrichmentFanoutService:
    """Resolves a movie and its recommendations against the metadata provider.

    The primary lookup is mandatory. Recommended lookups run concurrently (bounded by
    ``max_concurrency``); any that fail are dropped, the rest keep their source order.
    """

    def __init__(
        self,
        index: RecommendationIndexRepository,
        metadata_client: MetadataClientPort,
        logger: LoggerPort,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.index = index
        self.metadata_client = metadata_client
        self.logger = logger
        self.max_concurrency = max_concurrency

    async def resolve(self, movie_id: int) -> EnrichedRecommendation:
        slots = self.index.lookup(movie_id)
        if slots is None:
            raise UnknownMovieError(movie_id)

        recommended_ids = [slot.movie_id for slot in slots if not slot.is_empty]
        semaphore = asyncio.Semaphore(self.max_concurrency)

        primary_task = asyncio.ensure_future(self.metadata_client.fetch_by_id(movie_id))
        recommended_tasks = [
            asyncio.ensure_future(self._fetch_recommended(recommended_id, semaphore))
            for recommended_id in recommended_ids
        ]
        try:
            try:
                primary = await primary_task
            except MetadataProviderError as e:
                self.logger.error(f"Primary metadata lookup failed for movie {movie_id}: {e}")
                raise PrimaryLookupFailedError(movie_id, e) from e

            outcomes: List[FetchOutcome] = await asyncio.gather(*recommended_tasks)
        finally:
            for task in [primary_task, *recommended_tasks]:
                if not task.done():
                    task.cancel()

        recommendations = []
        for outcome in outcomes:
            if outcome.ok:
                recommendations.append(outcome.metadata)
            else:
                # TODO: distinguish MovieNotFoundRemoteError (stale table entry) from transient failures
                self.logger.warning(
                    f"Dropping recommended movie {outcome.movie_id}: {type(outcome.error).__name__}: {outcome.error}"
                )
        self.logger.info(
            f"Resolved {len(recommendations)}/{len(recommended_ids)} recommendations for movie {movie_id}"
        )
        return EnrichedRecommendation(movie=primary, recommendations=recommendations)

    async def _fetch_recommended(self, movie_id: int, semaphore: asyncio.Semaphore) -> FetchOutcome:
        async with semaphore:
            try:
                metadata = await self.metadata_client.fetch_by_id(movie_id)
            except MetadataProviderError as e:
                return FetchOutcome(movie_id=movie_id, error=e)
        return FetchOutcome(movie_id=movie_id, metadata=metadata)
