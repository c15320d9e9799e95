"""Abstract hosting-platform interface."""

from abc import ABC, abstractmethod

from repograder.vcs.models import CommitEntry, RepoInfo, TreeListing


class VCSError(Exception):
    """Wraps provider-specific read failures with context.

    ``status_code`` is the HTTP status of a non-success response, or None for
    transport failures (timeouts, refused connections) and for responses that
    could not be decoded.
    """

    def __init__(
        self, operation: str, cause: Exception, status_code: int | None = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{operation} failed: {cause}")
        self.__cause__ = cause


class VCSProvider(ABC):
    """Abstract base class for hosting providers.

    Each method is one read-only request keyed by a repository identifier in
    "owner/repo" format. Implementations raise VCSError on failure.
    """

    @abstractmethod
    async def get_repo_info(self, repo_id: str) -> RepoInfo:
        """Fetch repository metadata, including the default branch."""
        ...

    @abstractmethod
    async def get_readme(self, repo_id: str) -> str:
        """Fetch the decoded text of the repository readme."""
        ...

    @abstractmethod
    async def get_tree(self, repo_id: str, ref: str) -> TreeListing:
        """List every path in the tree of ``ref``, recursively.

        Args:
            repo_id: Repository identifier in "owner/repo" format.
            ref: Branch name (or sha) whose tree to list.
        """
        ...

    @abstractmethod
    async def get_commits(self, repo_id: str, limit: int) -> list[CommitEntry]:
        """Fetch a single page of at most ``limit`` most recent commits."""
        ...

    @abstractmethod
    async def get_languages(self, repo_id: str) -> dict[str, int]:
        """Fetch per-language byte counts in platform order."""
        ...
