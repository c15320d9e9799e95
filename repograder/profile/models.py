"""Pydantic models for the quality profile."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

NO_README = "No README found"
NO_DESCRIPTION = "No description"


class QualityProfile(BaseModel):
    """Quality signals derived from one AggregateRecord.

    Every field is always present; the assessment prompt references all of
    them by name.
    """

    model_config = ConfigDict(frozen=True)

    # Basic info
    repo_name: str
    description: str = NO_DESCRIPTION
    stars: int = 0
    languages: str = ""

    # README
    has_readme: bool = False
    readme_length: int = 0
    readme_preview: str = NO_README

    # Structure
    file_count: int = 0
    has_tests: bool = False
    has_docs: bool = False
    has_ci: bool = False
    has_gitignore: bool = False
    has_license: bool = False

    # History
    commit_count: int = 0
    avg_message_length: float = 0.0
    sample_commits: list[str] = Field(default_factory=list)
