from abc import ABC, abstractmethod
from typing import List

from movie_recommendation.domain.models.movie import MovieMetadata


class MetadataClientPort(ABC):
    """Boundary to the external movie catalog. Implementations never retry or cache."""

    @abstractmethod
    async def fetch_by_id(self, movie_id: int) -> MovieMetadata:
        """Fetch one movie, raising a MetadataProviderError subclass on failure"""
        pass

    @abstractmethod
    async def search_by_title(self, query: str) -> List[MovieMetadata]:
        """Search the catalog by title; an empty query returns [] without a remote call"""
        pass
