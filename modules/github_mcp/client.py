"""GitHub REST API client.

Every call returns exactly one ``RemoteCallResult`` variant instead of
raising, so handlers branch on the outcome tag (``NotFound`` in particular)
rather than on error text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import httpx
import structlog

logger = structlog.get_logger()

# GitHub API base
_DEFAULT_BASE = "https://api.github.com"
_DEFAULT_USER_AGENT = "GitHub-MCP-Server/1.0.0"
ACCEPT_HEADER = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class NotFound:
    body: str = ""


@dataclass(frozen=True)
class HttpError:
    status: int
    reason: str
    body: str

    def describe(self) -> str:
        return f"GitHub API error: {self.status} {self.reason} - {self.body}"


@dataclass(frozen=True)
class NetworkError:
    message: str

    def describe(self) -> str:
        return f"Network error: {self.message}"


RemoteCallResult = Union[Success, NotFound, HttpError, NetworkError]


def describe_failure(result: RemoteCallResult) -> str:
    """Render any non-success outcome as one line of diagnostic text."""
    if isinstance(result, NotFound):
        return HttpError(404, "Not Found", result.body).describe()
    if isinstance(result, (HttpError, NetworkError)):
        return result.describe()
    raise TypeError(f"not a failure: {result!r}")


class GitHubClient:
    """Thin async wrapper over ``httpx.AsyncClient`` for the GitHub REST API v3.

    The credential is supplied per call; the underlying connection pool is
    shared by every request the process serves.
    """

    def __init__(
        self,
        base_url: str = _DEFAULT_BASE,
        user_agent: str = _DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _headers(self, credential: str | None) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent, "Accept": ACCEPT_HEADER}
        if credential:
            headers["Authorization"] = f"token {credential}"
        return headers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def call(
        self,
        method: str,
        path: str,
        credential: str | None = None,
        body: Any = None,
    ) -> RemoteCallResult:
        """Issue one request and classify the outcome. Never retries."""
        url = f"{self.base_url}{path}"
        try:
            resp = await self._client.request(
                method,
                url,
                headers=self._headers(credential),
                json=body,
            )
        except httpx.RequestError as e:
            logger.warning("github_request_failed", method=method, path=path, error=str(e))
            return NetworkError(str(e) or type(e).__name__)

        logger.debug("github_request", method=method, path=path, status=resp.status_code)

        if resp.status_code == 404:
            return NotFound(resp.text)
        if not resp.is_success:
            logger.warning("github_request_failed", method=method, path=path, status=resp.status_code)
            return HttpError(resp.status_code, resp.reason_phrase, resp.text)
        if resp.status_code == 204 or not resp.content:
            return Success(None)
        try:
            return Success(resp.json())
        except ValueError as e:
            return NetworkError(f"Malformed JSON payload from {path}: {e}")

    async def get(self, path: str, credential: str | None = None) -> RemoteCallResult:
        return await self.call("GET", path, credential)

    async def post(self, path: str, body: Any, credential: str | None = None) -> RemoteCallResult:
        return await self.call("POST", path, credential, body=body)

    async def aclose(self) -> None:
        await self._client.aclose()
