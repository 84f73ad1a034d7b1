"""Abstract pull request source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from prgate.github.pr_url import PrRef
from prgate.linter.models import FileDiff, PrMeta


class PullRequestSource(ABC):
    """Supplies PR metadata and changed files for the validation service."""

    @abstractmethod
    async def get_pull_request(self, ref: PrRef) -> PrMeta:
        """Return title, URL and author of the pull request."""
        ...

    @abstractmethod
    async def list_files(self, ref: PrRef) -> list[FileDiff]:
        """Return every changed file with its patch (if GitHub provides one)."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the source is reachable."""
        ...
