from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI

from movie_recommendation.applications.interfaces.dtos.message import Message
from movie_recommendation.infrastructure.config.dependencies import (
    build_metadata_client,
    build_recommendation_index,
    get_settings,
)
from movie_recommendation.infrastructure.logging.logger import Logger, setup_logging
from movie_recommendation.presentation.routers import health, movies

logger = Logger.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The only place the index and provider client are built; there is no reload path.
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app.state.recommendation_index = build_recommendation_index(settings)
    app.state.metadata_client = build_metadata_client(settings)
    app.state.max_concurrency = settings.FANOUT_MAX_CONCURRENCY
    logger.info(f"Serving recommendations for {len(app.state.recommendation_index)} movies")
    try:
        yield
    finally:
        await app.state.metadata_client.aclose()


app = FastAPI(lifespan=lifespan)

app.include_router(movies.router)
app.include_router(health.router)


@app.get("/", status_code=HTTPStatus.OK, response_model=Message)
def read_root():
    return {"message": "Search for a movie to get recommendations"}
