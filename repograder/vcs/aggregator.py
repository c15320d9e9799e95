"""Source aggregator: reads every hosting API resource for one repository."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from repograder.errors import FetchError, FetchStage
from repograder.vcs.base import VCSError, VCSProvider
from repograder.vcs.models import AggregateRecord, TreeListing

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_PAGE_SIZE = 20

# Required reads that follow the repo info read, in reporting order.
_REQUIRED_AFTER_INFO = (FetchStage.TREE, FetchStage.COMMITS, FetchStage.LANGUAGES)


class SourceAggregator:
    """Assembles an AggregateRecord from a fixed set of hosting API reads.

    Failure policy:
        repo info  required, fetched first; failure stops everything
        readme     optional; any failure leaves ``readme`` as None
        tree       required (default branch, recursive)
        commits    required (one page)
        languages  required

    The reads after repo info do not depend on each other and run
    concurrently. The first required failure cancels whatever is still
    pending and is raised as a FetchError naming its stage. Any exception
    a provider raises counts as a failure, not only VCSError.
    """

    def __init__(
        self, provider: VCSProvider, commit_page_size: int = DEFAULT_COMMIT_PAGE_SIZE
    ) -> None:
        self.provider = provider
        self.commit_page_size = commit_page_size

    async def fetch(self, owner: str, project: str) -> AggregateRecord:
        repo_id = f"{owner}/{project}"
        logger.info("Fetching data for %s", repo_id)

        info = await self._required(FetchStage.REPO_INFO, self.provider.get_repo_info(repo_id))
        logger.info("Repo info fetched (default branch %s)", info.default_branch)

        readme_task = asyncio.create_task(self._readme(repo_id))
        required = {
            FetchStage.TREE: asyncio.create_task(
                self._required(FetchStage.TREE, self.provider.get_tree(repo_id, info.default_branch))
            ),
            FetchStage.COMMITS: asyncio.create_task(
                self._required(
                    FetchStage.COMMITS,
                    self.provider.get_commits(repo_id, self.commit_page_size),
                )
            ),
            FetchStage.LANGUAGES: asyncio.create_task(
                self._required(FetchStage.LANGUAGES, self.provider.get_languages(repo_id))
            ),
        }
        all_tasks = [readme_task, *required.values()]

        try:
            await asyncio.wait(all_tasks, return_when=asyncio.FIRST_EXCEPTION)
            self._raise_first_failure(required)
            readme = await readme_task
        finally:
            pending = [task for task in all_tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        tree: TreeListing = required[FetchStage.TREE].result()
        commits = required[FetchStage.COMMITS].result()
        languages = required[FetchStage.LANGUAGES].result()

        logger.info("File tree fetched: %d entries", len(tree.entries))
        if tree.truncated:
            logger.warning("File tree for %s was truncated by the API", repo_id)
        logger.info("Commits fetched: %d", len(commits))
        logger.info("Languages fetched: %s", ", ".join(languages) or "none")

        return AggregateRecord(
            info=info,
            readme=readme,
            files=tree.entries,
            commits=commits,
            languages=languages,
            tree_truncated=tree.truncated,
        )

    async def _required(self, stage: FetchStage, call: Awaitable[Any]) -> Any:
        try:
            return await call
        except VCSError as e:
            logger.error("Required fetch %s failed: %s", stage.value, e)
            raise FetchError(stage, e.status_code, str(e.__cause__ or e)) from e
        except Exception as e:
            # Provider raised something other than VCSError.
            logger.error("Required fetch %s failed: %r", stage.value, e)
            raise FetchError(stage, None, repr(e)) from e

    async def _readme(self, repo_id: str) -> str | None:
        try:
            readme = await self.provider.get_readme(repo_id)
        except VCSError as e:
            if e.status_code == 404:
                logger.warning("No README found for %s", repo_id)
            else:
                logger.warning("README fetch failed for %s: %s", repo_id, e)
            return None
        except Exception as e:
            logger.warning("README fetch failed for %s: %r", repo_id, e)
            return None
        logger.info("README fetched (%d chars)", len(readme))
        return readme

    @staticmethod
    def _raise_first_failure(required: dict[FetchStage, asyncio.Task]) -> None:
        """Raise the failure of the earliest stage that has failed, if any."""
        # Retrieve every exception so none is reported as never retrieved.
        failures: list[BaseException] = []
        for stage in _REQUIRED_AFTER_INFO:
            task = required[stage]
            if task.done() and not task.cancelled() and task.exception() is not None:
                failures.append(task.exception())
        if failures:
            raise failures[0]
