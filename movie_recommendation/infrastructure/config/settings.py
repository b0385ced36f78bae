from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    MOVIE_API_KEY: str
    MOVIE_API_BASE_URL: str = "https://api.themoviedb.org/3"
    MOVIE_API_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    RECOMMENDATIONS_PATH: str = "recommendations/recommendations.json"
    FANOUT_MAX_CONCURRENCY: int = Field(default=20, ge=1)
    LOG_LEVEL: str = "INFO"
