"""Pydantic models for hosting API data."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RepoInfo(BaseModel):
    """Repository-level metadata from the hosting API."""

    model_config = ConfigDict(frozen=True)

    name: str
    full_name: str = Field(description="Full name including owner (e.g. owner/repo)")
    description: str | None = None
    stars: int = 0
    default_branch: str = "main"
    url: str = ""
    forks: int = 0
    open_issues: int = 0
    pushed_at: datetime | None = None


class TreeEntry(BaseModel):
    """One entry of a recursive git tree listing."""

    model_config = ConfigDict(frozen=True)

    path: str
    type: Literal["blob", "tree", "commit"] = "blob"
    size: int | None = None
    sha: str | None = None


class TreeListing(BaseModel):
    """A recursive tree listing; ``truncated`` is set when the platform capped it."""

    model_config = ConfigDict(frozen=True)

    entries: list[TreeEntry] = Field(default_factory=list)
    truncated: bool = False


class CommitEntry(BaseModel):
    """A commit from the history page, most recent first."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str
    authored_at: datetime | None = None


class AggregateRecord(BaseModel):
    """Everything fetched for one repository in a single pipeline run.

    ``readme`` is None when the readme read failed or the repository has
    none; an empty readme is the empty string.
    """

    model_config = ConfigDict(frozen=True)

    info: RepoInfo
    readme: str | None = None
    files: list[TreeEntry] = Field(default_factory=list)
    commits: list[CommitEntry] = Field(default_factory=list)
    languages: dict[str, int] = Field(
        default_factory=dict,
        description="Language breakdown in bytes (e.g. {'Python': 45000, 'Shell': 1200})",
    )
    tree_truncated: bool = False
