"""Tests for pull request URL parsing."""

from __future__ import annotations

import pytest

from prgate.errors import InvalidPrUrl
from prgate.github.pr_url import PrRef, parse_pr_url


class TestParsePrUrl:
    def test_github_url(self) -> None:
        ref = parse_pr_url("https://github.com/MetaMask/metamask-mobile/pull/12345")
        assert ref == PrRef(owner="MetaMask", repo="metamask-mobile", pull_number=12345)
        assert ref.slug == "MetaMask/metamask-mobile#12345"

    def test_trailing_path_and_whitespace(self) -> None:
        ref = parse_pr_url("  https://github.com/acme/app/pull/7/files?w=1  ")
        assert (ref.owner, ref.repo, ref.pull_number) == ("acme", "app", 7)

    def test_fragment(self) -> None:
        assert parse_pr_url("https://github.com/acme/app/pull/7#discussion").pull_number == 7

    def test_enterprise_host(self) -> None:
        ref = parse_pr_url("https://git.example.com/acme/app/pull/3")
        assert ref.owner == "acme"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "not a url",
            "https://github.com/acme/app",
            "https://github.com/acme/app/issues/7",
            "https://github.com/acme/app/pull/abc",
            "https://github.com/acme/app/pull/7extra",
            "ftp://github.com/acme/app/pull/7",
        ],
    )
    def test_invalid(self, url: str) -> None:
        with pytest.raises(InvalidPrUrl):
            parse_pr_url(url)
