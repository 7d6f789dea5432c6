class StarHistoryError(Exception):
    """Base class for failures surfaced as a 500 by the request handler."""


class GitHubAPIError(StarHistoryError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"GitHub API error: {status_code}")


class GitHubRequestError(StarHistoryError):
    """The upstream call never produced a response (DNS, connect, timeout)."""


class PayloadParseError(StarHistoryError):
    """GitHub answered 2xx but the body is not a list of repositories."""
