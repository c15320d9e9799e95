"""GitHub hosting provider using PyGithub."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import cached_property
from typing import TypeVar

import requests
from github import Auth, BadAttributeException, Github, GithubException
from github.Repository import Repository

from repograder.vcs.base import VCSError, VCSProvider
from repograder.vcs.models import CommitEntry, RepoInfo, TreeEntry, TreeListing

DEFAULT_BASE_URL = "https://api.github.com"

T = TypeVar("T")


class GitHubProvider(VCSProvider):
    """GitHub implementation of VCSProvider using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.

    The token is optional: public repositories can be read anonymously,
    at a lower rate limit. Client-side retries are disabled so every read
    is a single round trip bounded by ``timeout`` seconds. The client is
    lazy: a Repository handle costs no request until one of its fields or
    sub-resources is read.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 15,
        per_page: int = 20,
    ) -> None:
        self._token = token or None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._per_page = per_page

    @cached_property
    def _client(self) -> Github:
        auth = Auth.Token(self._token) if self._token else None
        return Github(
            auth=auth,
            base_url=self._base_url,
            timeout=self._timeout,
            per_page=self._per_page,
            retry=None,
            lazy=True,
        )

    def _get_repo(self, repo_id: str) -> Repository:
        return self._client.get_repo(repo_id)

    async def _call(self, operation: str, fn: Callable[[], T]) -> T:
        """Run a blocking PyGithub call in a thread, translating its failures.

        Besides HTTP and transport errors, a response PyGithub or our models
        cannot make sense of (unexpected attribute types, a content encoding
        other than base64, out-of-range values) becomes a VCSError without a
        status code.
        """
        try:
            return await asyncio.to_thread(fn)
        except GithubException as e:
            raise VCSError(operation, e, status_code=e.status) from e
        except requests.RequestException as e:
            raise VCSError(operation, e) from e
        except (BadAttributeException, AssertionError, ValueError) as e:
            raise VCSError(operation, e) from e

    async def get_repo_info(self, repo_id: str) -> RepoInfo:
        """Get metadata for a specific repository."""

        def _sync() -> RepoInfo:
            # Fetch now; a lazy handle would report the caller's casing of the name.
            repo = self._get_repo(repo_id)
            repo.complete()
            return RepoInfo(
                name=repo.name,
                full_name=repo.full_name,
                description=repo.description,
                stars=repo.stargazers_count or 0,
                default_branch=repo.default_branch or "main",
                url=repo.html_url or "",
                forks=repo.forks_count or 0,
                open_issues=repo.open_issues_count or 0,
                pushed_at=repo.pushed_at,
            )

        return await self._call("get_repo_info", _sync)

    async def get_readme(self, repo_id: str) -> str:
        """Fetch the readme; only base64-encoded content can be decoded."""

        def _sync() -> str:
            content = self._get_repo(repo_id).get_readme()
            return content.decoded_content.decode("utf-8", errors="replace")

        return await self._call("get_readme", _sync)

    async def get_tree(self, repo_id: str, ref: str) -> TreeListing:
        """List the full tree of ``ref`` in one recursive request."""

        def _sync() -> TreeListing:
            tree = self._get_repo(repo_id).get_git_tree(ref, recursive=True)
            entries = [
                TreeEntry(path=e.path, type=e.type, size=e.size, sha=e.sha)
                for e in tree.tree
            ]
            return TreeListing(
                entries=entries,
                truncated=bool(tree.raw_data.get("truncated", False)),
            )

        return await self._call("get_tree", _sync)

    async def get_commits(self, repo_id: str, limit: int) -> list[CommitEntry]:
        """Fetch only the first page of history; never follows pagination."""

        def _sync() -> list[CommitEntry]:
            page = self._get_repo(repo_id).get_commits().get_page(0)
            commits: list[CommitEntry] = []
            for c in page[:limit]:
                author = c.commit.author
                commits.append(
                    CommitEntry(
                        sha=c.sha,
                        message=c.commit.message or "",
                        authored_at=author.date if author is not None else None,
                    )
                )
            return commits

        return await self._call("get_commits", _sync)

    async def get_languages(self, repo_id: str) -> dict[str, int]:
        """Fetch per-language byte totals.

        PyGithub hands back the raw JSON object, which may carry extra
        non-count keys (newer releases add ``url``); only integer counts are
        kept.
        """

        def _sync() -> dict[str, int]:
            data = self._get_repo(repo_id).get_languages()
            return {name: size for name, size in data.items() if isinstance(size, int)}

        return await self._call("get_languages", _sync)
