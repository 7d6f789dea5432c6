from typing import Sequence
from urllib.parse import quote

from ..schemas import RepositorySummary

STAR_HISTORY_SVG = "https://api.star-history.com/svg"

# characters encodeURIComponent leaves alone on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


def build_star_history_url(username: str, repositories: Sequence[RepositorySummary]) -> str:
    repo_list = ",".join(f"{username}/{repo.name}" for repo in repositories)
    return f"{STAR_HISTORY_SVG}?repos={quote(repo_list, safe=_URI_COMPONENT_SAFE)}&type=Date"
