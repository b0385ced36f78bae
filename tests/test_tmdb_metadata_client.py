import httpx
import pytest

from movie_recommendation.domain.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    MetadataProviderError,
    MovieNotFoundRemoteError,
    RateLimitedError,
    TransientProviderError,
)
from movie_recommendation.infrastructure.adapters.services.tmdb_metadata_client import TMDBMetadataClient

BASE_URL = "https://tmdb.test/3"


class TestTMDBMetadataClient:
    """Tests for the TMDB adapter using an in-process httpx transport"""

    @pytest.fixture
    def requests_seen(self):
        return []

    @pytest.fixture
    def make_client(self, requests_seen):
        def _make(handler):
            def recording_handler(request: httpx.Request) -> httpx.Response:
                requests_seen.append(request)
                return handler(request)

            transport = httpx.MockTransport(recording_handler)
            return TMDBMetadataClient(
                api_key="secret", base_url=BASE_URL, client=httpx.AsyncClient(transport=transport)
            )

        return _make

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, make_client, requests_seen, movie_factory):
        payload = movie_factory.create_payload(550, genres=[{"id": 18, "name": "Drama"}])
        client = make_client(lambda request: httpx.Response(200, json=payload))

        movie = await client.fetch_by_id(550)

        assert movie.id == 550
        assert movie.title == "Fight Club"
        assert movie.model_dump()["genres"] == [{"id": 18, "name": "Drama"}]
        (request,) = requests_seen
        assert request.url.path == "/3/movie/550"
        assert request.url.params["api_key"] == "secret"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error",
        [
            (404, MovieNotFoundRemoteError),
            (429, RateLimitedError),
            (500, TransientProviderError),
            (503, TransientProviderError),
            (401, MetadataProviderError),
        ],
    )
    async def test_fetch_status_mapping(self, make_client, status, error):
        client = make_client(lambda request: httpx.Response(status, json={"status_message": "nope"}))

        with pytest.raises(error):
            await client.fetch_by_id(550)

    @pytest.mark.asyncio
    async def test_rate_limit_carries_retry_after(self, make_client):
        client = make_client(lambda request: httpx.Response(429, headers={"Retry-After": "7"}))

        with pytest.raises(RateLimitedError) as exc_info:
            await client.fetch_by_id(550)

        assert exc_info.value.retry_after == 7.0

    @pytest.mark.asyncio
    async def test_network_error_is_transient(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransientProviderError):
            await client.fetch_by_id(550)

    @pytest.mark.asyncio
    async def test_timeout_is_transient(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(TransientProviderError):
            await client.fetch_by_id(550)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["inf", "nan", "-3", "soon"])
    async def test_unusable_retry_after_is_ignored(self, make_client, value):
        client = make_client(lambda request: httpx.Response(429, headers={"Retry-After": value}))

        with pytest.raises(RateLimitedError) as exc_info:
            await client.fetch_by_id(550)

        assert exc_info.value.retry_after is None

    @pytest.mark.asyncio
    async def test_undecodable_body_is_transient(self, make_client):
        """A gzip-labelled body that is not gzip fails to decode"""
        client = make_client(
            lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")
        )

        with pytest.raises(TransientProviderError) as exc_info:
            await client.fetch_by_id(550)

        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_too_many_redirects_is_transient(self, make_client):
        def handler(request):
            raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

        client = make_client(handler)

        with pytest.raises(TransientProviderError):
            await client.search_by_title("heat")

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self, make_client):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(MalformedResponseError):
            await client.fetch_by_id(550)

    @pytest.mark.asyncio
    async def test_payload_without_id_is_malformed(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"title": "No id"}))

        with pytest.raises(MalformedResponseError):
            await client.fetch_by_id(550)

    @pytest.mark.asyncio
    async def test_search_by_title(self, make_client, requests_seen, movie_factory):
        payload = {
            "page": 1,
            "results": [movie_factory.create_payload(550), {"title": "broken"}, movie_factory.create_payload(551)],
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))

        movies = await client.search_by_title("fight club")

        assert [movie.id for movie in movies] == [550, 551]
        (request,) = requests_seen
        assert request.url.path == "/3/search/movie"
        assert request.url.params["query"] == "fight club"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_empty_search_makes_no_request(self, make_client, requests_seen, query):
        client = make_client(lambda request: httpx.Response(500))

        assert await client.search_by_title(query) == []
        assert requests_seen == []

    @pytest.mark.asyncio
    async def test_search_without_results_is_malformed(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"page": 1}))

        with pytest.raises(MalformedResponseError):
            await client.search_by_title("fight club")

    @pytest.mark.asyncio
    async def test_search_is_not_retried(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(502))

        with pytest.raises(TransientProviderError):
            await client.search_by_title("heat")

        assert len(requests_seen) == 1

    @pytest.mark.parametrize("api_key", ["", "  "])
    def test_missing_api_key(self, api_key):
        with pytest.raises(ConfigurationError):
            TMDBMetadataClient(api_key=api_key, base_url=BASE_URL)

    @pytest.mark.asyncio
    async def test_aclose(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"id": 1}))

        await client.aclose()

        assert client._client.is_closed
