from typing import Optional


class DomainError(Exception):
    pass


class ConfigurationError(DomainError):
    pass


class LoadError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class UnknownMovieError(NotFoundError):
    def __init__(self, movie_id: int):
        super().__init__(f"Movie with id {movie_id} has no recommendations")
        self.movie_id = movie_id


class MetadataProviderError(DomainError):
    pass


class MovieNotFoundRemoteError(MetadataProviderError):
    pass


class TransientProviderError(MetadataProviderError):
    pass


class RateLimitedError(MetadataProviderError):
    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class MalformedResponseError(MetadataProviderError):
    pass


class PrimaryLookupFailedError(DomainError):
    def __init__(self, movie_id: int, cause: MetadataProviderError):
        super().__init__(f"Metadata lookup failed for movie id={movie_id}: {cause}")
        self.movie_id = movie_id
        self.cause = cause
