import json
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .datasources.base import DataSource, PayloadError, UpstreamError, UserNotFound
from .datasources.github_adapter import GitHubAdapter
from .errors import GitHubAPIError, PayloadParseError, StarHistoryError
from .schemas import RankedRepository, StarHistoryResponse
from .services.chart import build_star_history_url
from .services.ranking import rank_repositories

USAGE = "Usage: GET /{username}"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
}

# common methods are routed here; any other verb is turned into the usage text by the 405 handler below
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class PrettyJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


settings = get_settings()
configure_logging(settings.log_level)


@lru_cache
def get_github() -> DataSource:
    return GitHubAdapter.from_settings(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # one connection pool per process, closed on shutdown if it was ever opened
    if get_github.cache_info().currsize:
        await get_github().aclose()
        get_github.cache_clear()


# docs/openapi routes would shadow usernames like "docs"
app = FastAPI(
    title="Star History API",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def usage_for_unrouted(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code in (404, 405):
        return PlainTextResponse(USAGE, status_code=400)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.api_route("/{path:path}", methods=ROUTED_METHODS)
async def star_history(request: Request, path: str, github: DataSource = Depends(get_github)) -> Response:
    segments = [part for part in path.split("/") if part]
    if request.method != "GET" or len(segments) != 1:
        return PlainTextResponse(USAGE, status_code=400)

    username = segments[0]
    logger.info(f"[star-history] looking up repositories for {username}")
    try:
        fetched = await github.list_user_repositories(username)
        if isinstance(fetched, UserNotFound):
            logger.info(f"[star-history] GitHub user {username} not found")
            return PlainTextResponse(f"User '{username}' not found", status_code=404)
        if isinstance(fetched, UpstreamError):
            raise GitHubAPIError(fetched.status_code)
        if isinstance(fetched, PayloadError):
            raise PayloadParseError(fetched.detail)

        repos = fetched.repositories
        top_repos = rank_repositories(repos)
        logger.info(f"[star-history] {username}: {len(repos)} repositories, {len(top_repos)} ranked")
        if not top_repos:
            return PlainTextResponse(f"No starred repositories found for user '{username}'")

        body = StarHistoryResponse(
            username=username,
            total_repos_found=len(repos),
            starred_repos_count=len(top_repos),
            star_history_url=build_star_history_url(username, top_repos),
            repositories=[RankedRepository.from_summary(repo) for repo in top_repos],
        )
        return PrettyJSONResponse(body.model_dump(mode="json"), headers=CORS_HEADERS)
    except StarHistoryError as exc:
        logger.error(f"[star-history] GitHub lookup failed for {username}: {exc}")
        return PlainTextResponse(f"Error: {exc}", status_code=500)
    except Exception as exc:
        logger.exception(f"[star-history] Error fetching repositories for {username}: {exc}")
        return PlainTextResponse(f"Error: {exc}", status_code=500)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
