"""Error types surfaced by the PR gate service."""

from __future__ import annotations


class PrGateError(Exception):
    """Base class for errors reported to API callers."""


class InvalidPrUrl(PrGateError):
    """The PR link does not look like https://host/<owner>/<repo>/pull/<number>."""


class PrFetchFailure(PrGateError):
    """The PR source (GitHub API) could not return the pull request or its files."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StreamingTransportFailure(PrGateError):
    """The event stream consumer went away before the producer finished."""


class RulesConfigError(PrGateError):
    """A rules file could not be parsed into a rule set."""
