from typing import List, Optional
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..config import Settings
from ..errors import GitHubRequestError
from ..schemas import RepositorySummary
from .base import (
    DataSource,
    FetchResult,
    PayloadError,
    ReposFetched,
    UpstreamError,
    UserNotFound,
)

USER_AGENT = "Cloudflare-Worker-Star-History"
PER_PAGE = 100

_repo_list = TypeAdapter(List[RepositorySummary])


class GitHubAdapter(DataSource):
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        proxy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"User-Agent": USER_AGENT}
        if token:
            headers["Authorization"] = f"token {token}"
        self.headers = headers
        client_kwargs = {"base_url": base_url, "follow_redirects": True}
        if proxy:
            client_kwargs["proxy"] = proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**client_kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubAdapter":
        return cls(
            token=settings.github_token,
            base_url=str(settings.github_base_url),
            proxy=settings.github_proxy,
        )

    async def list_user_repositories(self, username: str) -> FetchResult:
        """Fetch the first page of a user's repositories, most recently updated first.

        Upstream failures come back as tagged results; only transport errors raise.
        """
        params = {"per_page": PER_PAGE, "sort": "updated"}
        try:
            # escaped so that "?", "#" or "/" in a name cannot leave the repos path
            resp = await self.client.get(f"/users/{quote(username, safe='')}/repos", params=params, headers=self.headers)
        except httpx.RequestError as exc:
            raise GitHubRequestError(f"GitHub request error: {type(exc).__name__} {exc}") from exc

        logger.debug(f"[github] GET {resp.request.url} -> {resp.status_code}")
        if resp.status_code == 404:
            return UserNotFound()
        if not resp.is_success:
            return UpstreamError(status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            return PayloadError(detail=f"Invalid JSON from GitHub: {exc}")
        if not isinstance(data, list):
            return PayloadError(detail=f"Expected a JSON array from GitHub, got {type(data).__name__}")
        try:
            repositories = _repo_list.validate_python(data)
        except ValidationError as exc:
            return PayloadError(detail=f"Unexpected repository payload from GitHub: {exc.error_count()} invalid field(s)")
        return ReposFetched(repositories=repositories)

    async def aclose(self) -> None:
        await self.client.aclose()
