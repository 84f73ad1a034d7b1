"""Pull request URL parsing."""

from __future__ import annotations

import re

from pydantic import BaseModel

from prgate.errors import InvalidPrUrl

PR_URL_RE = re.compile(
    r"^https?://(?P<host>[^/\s]+)/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+)/pull/(?P<number>\d+)(?:[/?#].*)?$"
)


class PrRef(BaseModel):
    """Identifies a pull request on the configured GitHub host."""

    owner: str
    repo: str
    pull_number: int

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pull_number}"


def parse_pr_url(url: str) -> PrRef:
    """Extract owner, repo and PR number from a pull request URL.

    Accepts ``https://github.com/<owner>/<repo>/pull/<number>`` and the same
    shape on other hosts; trailing paths like ``/files`` are ignored.
    """
    match = PR_URL_RE.match(url.strip())
    if not match:
        raise InvalidPrUrl(f"Invalid GitHub PR URL: {url!r}")
    return PrRef(
        owner=match.group("owner"),
        repo=match.group("repo"),
        pull_number=int(match.group("number")),
    )
