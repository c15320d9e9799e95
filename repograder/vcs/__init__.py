"""Hosting providers and the source aggregator."""

import os

from repograder.config.models import VCSConfig
from repograder.vcs.aggregator import SourceAggregator
from repograder.vcs.base import VCSError, VCSProvider
from repograder.vcs.github import GitHubProvider
from repograder.vcs.models import (
    AggregateRecord,
    CommitEntry,
    RepoInfo,
    TreeEntry,
    TreeListing,
)


def create_provider(config: VCSConfig, token: str | None = None) -> VCSProvider:
    """Create a hosting provider from config.

    An explicit ``token`` wins; otherwise the environment variable named in
    config.token_env is used. A missing token is allowed (anonymous reads).
    """
    if config.provider != "github":
        raise ValueError(
            f"Unsupported VCS provider: {config.provider!r}. "
            "Currently only 'github' is supported."
        )
    token = token or os.environ.get(config.token_env) or None
    return GitHubProvider(
        token=token,
        base_url=config.base_url,
        timeout=config.timeout,
        per_page=config.commit_page_size,
    )


__all__ = [
    "AggregateRecord",
    "CommitEntry",
    "GitHubProvider",
    "RepoInfo",
    "SourceAggregator",
    "TreeEntry",
    "TreeListing",
    "VCSError",
    "VCSProvider",
    "create_provider",
]
