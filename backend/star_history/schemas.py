from typing import List, Optional

from pydantic import BaseModel


class RepositorySummary(BaseModel):
    """Subset of a GitHub repository object; other upstream keys are ignored."""

    name: str
    full_name: str = ""
    stargazers_count: int = 0
    description: Optional[str] = None
    language: Optional[str] = None
    html_url: str = ""
    fork: bool = False


class RankedRepository(BaseModel):
    name: str
    full_name: str
    stars: int
    description: Optional[str]
    language: Optional[str]
    url: str

    @classmethod
    def from_summary(cls, repo: RepositorySummary) -> "RankedRepository":
        return cls(
            name=repo.name,
            full_name=repo.full_name,
            stars=repo.stargazers_count,
            description=repo.description,
            language=repo.language,
            url=repo.html_url,
        )


class StarHistoryResponse(BaseModel):
    username: str
    total_repos_found: int
    starred_repos_count: int
    star_history_url: str
    repositories: List[RankedRepository]
