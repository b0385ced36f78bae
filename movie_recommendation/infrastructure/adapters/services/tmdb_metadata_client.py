import math
from http import HTTPStatus
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from movie_recommendation.domain.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    MetadataProviderError,
    MovieNotFoundRemoteError,
    RateLimitedError,
    TransientProviderError,
)
from movie_recommendation.domain.models.movie import MovieMetadata
from movie_recommendation.domain.ports.services.metadata_client import MetadataClientPort
from movie_recommendation.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class TMDBMetadataClient(MetadataClientPort):
    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("MOVIE_API_KEY is required for the metadata provider")
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=3.0))

    async def fetch_by_id(self, movie_id: int) -> MovieMetadata:
        payload = await self._get(f"/movie/{movie_id}", {}, what=f"movie {movie_id}")
        try:
            return MovieMetadata.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected payload for movie {movie_id}") from e

    async def search_by_title(self, query: str) -> List[MovieMetadata]:
        if not query or not query.strip():
            return []

        payload = await self._get("/search/movie", {"query": query}, what=f"search {query!r}")
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise MalformedResponseError(f"Search payload for {query!r} has no results list")

        movies = []
        for item in results:
            try:
                movies.append(MovieMetadata.model_validate(item))
            except ValidationError:
                logger.debug(f"Skipping search result without a valid id: {item!r}")
        return movies

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict, what: str) -> Any:
        try:
            response = await self._client.get(
                f"{self.base_url}{path}", params={"api_key": self._api_key, **params}
            )
        except httpx.TimeoutException as e:
            raise TransientProviderError(f"Timed out fetching {what}") from e
        except httpx.TransportError as e:
            raise TransientProviderError(f"Network error fetching {what}: {e}") from e
        except httpx.RequestError as e:
            raise TransientProviderError(f"Request failed fetching {what}: {type(e).__name__}: {e}") from e

        self._raise_for_status(response, what)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON for {what}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, what: str) -> None:
        status = response.status_code
        if response.is_success:
            return
        if status == HTTPStatus.NOT_FOUND:
            raise MovieNotFoundRemoteError(f"Provider has no record for {what}")
        if status == HTTPStatus.TOO_MANY_REQUESTS:
            raise RateLimitedError(f"Rate limited fetching {what}", retry_after=_retry_after(response))
        if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            raise TransientProviderError(f"Provider returned {status} for {what}")
        raise MetadataProviderError(f"Provider returned {status} for {what}")


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if math.isfinite(seconds) and seconds >= 0 else None
