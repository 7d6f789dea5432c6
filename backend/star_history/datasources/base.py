from typing import List, Literal, Protocol, Union

from pydantic import BaseModel

from ..schemas import RepositorySummary


class ReposFetched(BaseModel):
    kind: Literal["ok"] = "ok"
    repositories: List[RepositorySummary]


class UserNotFound(BaseModel):
    kind: Literal["not_found"] = "not_found"


class UpstreamError(BaseModel):
    kind: Literal["upstream_error"] = "upstream_error"
    status_code: int


class PayloadError(BaseModel):
    kind: Literal["parse_error"] = "parse_error"
    detail: str


FetchResult = Union[ReposFetched, UserNotFound, UpstreamError, PayloadError]


class DataSource(Protocol):
    async def list_user_repositories(self, username: str) -> FetchResult:
        ...
