"""GitHub REST API pull request source."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from prgate.errors import PrFetchFailure
from prgate.github.base import PullRequestSource
from prgate.github.pr_url import PrRef
from prgate.linter.models import FileDiff, PrMeta

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"

# GitHub returns at most 3000 files for a pull request, 100 per page
FILES_PER_PAGE = 100
MAX_FILE_PAGES = 30


class GitHubClient(PullRequestSource):
    """Fetches pull requests through the GitHub v3 REST API."""

    def __init__(self, base_url: str = DEFAULT_API_URL, token: str = "") -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers: dict[str, str] = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        client = await self._get_client()
        try:
            resp = await client.get(path, params=params)
        except httpx.HTTPError as e:
            raise PrFetchFailure(f"GitHub request failed: {e}") from e

        if resp.status_code != 200:
            try:
                err_data = resp.json()
            except ValueError:
                err_data = None
            err_msg = (
                err_data.get("message", resp.text)
                if isinstance(err_data, dict)
                else resp.text
            )
            raise PrFetchFailure(
                f"GitHub API error ({resp.status_code}): {err_msg}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            preview = resp.text[:200] if resp.text else "(empty)"
            raise PrFetchFailure(f"GitHub returned non-JSON response: {preview}") from e

    async def get_pull_request(self, ref: PrRef) -> PrMeta:
        """GET /repos/{owner}/{repo}/pulls/{number}."""
        data = await self._get_json(
            f"/repos/{ref.owner}/{ref.repo}/pulls/{ref.pull_number}"
        )
        user = data.get("user") or {}
        return PrMeta(
            title=data.get("title", ""),
            url=data.get("html_url", ""),
            author=user.get("login", ""),
        )

    async def list_files(self, ref: PrRef) -> list[FileDiff]:
        """GET /repos/{owner}/{repo}/pulls/{number}/files, following pages."""
        files: list[FileDiff] = []
        path = f"/repos/{ref.owner}/{ref.repo}/pulls/{ref.pull_number}/files"

        for page in range(1, MAX_FILE_PAGES + 1):
            batch = await self._get_json(
                path, params={"per_page": FILES_PER_PAGE, "page": page}
            )
            if not isinstance(batch, list):
                raise PrFetchFailure(
                    f"Unexpected GitHub file list format: {type(batch).__name__}"
                )
            files.extend(FileDiff.model_validate(f) for f in batch)
            if len(batch) < FILES_PER_PAGE:
                break

        logger.debug("Fetched %d changed file(s) for %s", len(files), ref.slug)
        return files

    async def health_check(self) -> bool:
        """Check if the API is reachable by hitting /rate_limit."""
        try:
            client = await self._get_client()
            resp = await client.get("/rate_limit")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
