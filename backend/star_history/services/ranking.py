from typing import List, Sequence

from ..schemas import RepositorySummary

TOP_N = 10


def rank_repositories(repositories: Sequence[RepositorySummary], limit: int = TOP_N) -> List[RepositorySummary]:
    """Most-starred non-fork repositories, best first.

    The star filter runs after the cut to ``limit``, so fewer than ``limit``
    entries may come back. Equal star counts keep the order GitHub returned
    them in (most recently updated first); there is no secondary key.
    """
    own = [repo for repo in repositories if not repo.fork]
    # sorted() is stable, including with reverse=True
    top = sorted(own, key=lambda repo: repo.stargazers_count, reverse=True)[:limit]
    return [repo for repo in top if repo.stargazers_count > 0]
