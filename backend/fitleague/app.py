from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from fitleague.config import Environment, config, environment
from fitleague.database import database
from fitleague.routes import activity_minimums, cron, entries, roles
from fitleague.utils.alembic import alembic_run_migrations
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import FitLeagueError, ValidationError
from fitleague.utils.logging import logger


@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
    await database.connect()
    try:
        if config.auto_run_migrations and environment is not Environment.CI:
            alembic_run_migrations()

        app_.state.cache = TTLCache()
        logger.info(f"Started fitleague API in {environment.value} mode")

        yield

        app_.state.cache.clear()
    finally:
        await database.disconnect()


app = FastAPI(
    title="Fitleague API",
    docs_url="/docs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in config.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(exc: FitLeagueError) -> JSONResponse:
    content: dict[str, object] = {"detail": exc.detail}
    if isinstance(exc, ValidationError):
        content["errors"] = [error.model_dump() for error in exc.errors]

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(content, status_code=exc.status_code, headers=headers)


@app.exception_handler(FitLeagueError)
async def fitleague_exception_handler(_: Request, exc: FitLeagueError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Request failed: {exc.detail}")
    return error_response(exc)


@app.exception_handler(Exception)
async def generic_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception(exc)
    return JSONResponse(
        {"detail": "Internal server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


routers = {
    "Roles": roles.router,
    "Activity minimums": activity_minimums.router,
    "Entries": entries.router,
    "Cron": cron.router,
}

for tag, router in routers.items():
    app.include_router(router, tags=[tag])
