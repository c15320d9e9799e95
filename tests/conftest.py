"""Shared test fixtures for repograder."""

import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from repograder.config.models import RepoGraderConfig
from repograder.llm.base import LLMProvider
from repograder.llm.models import LLMConfig as LLMRuntimeConfig, LLMResponse, TokenUsage
from repograder.vcs.base import VCSProvider
from repograder.vcs.models import (
    AggregateRecord,
    CommitEntry,
    RepoInfo,
    TreeEntry,
    TreeListing,
)

FENCED_REPLY = (
    "```json\n"
    '{"level":"INTERMEDIATE","confidence":70,"summary":"ok","next_actions":["a","b","c"]}'
    "\n```"
)


@pytest.fixture
def sample_repo_info():
    return RepoInfo(
        name="widget",
        full_name="acme/widget",
        description="A small widget library",
        stars=12,
        default_branch="main",
        url="https://github.com/acme/widget",
    )


@pytest.fixture
def sample_tree():
    """Three files: one gitignore, one under tests/, one source file."""
    return TreeListing(
        entries=[
            TreeEntry(path=".gitignore", type="blob", size=40, sha="g1"),
            TreeEntry(path="tests/test_widget.js", type="blob", size=300, sha="t1"),
            TreeEntry(path="index.js", type="blob", size=900, sha="i1"),
        ],
    )


@pytest.fixture
def sample_commits():
    return [
        CommitEntry(sha="c2", message="fix bug"),
        CommitEntry(sha="c1", message="Add feature X"),
    ]


@pytest.fixture
def sample_languages():
    return {"JS": 1000, "CSS": 200}


@pytest.fixture
def sample_readme():
    return "# Widget\n\nA small widget library.\n"


@pytest.fixture
def sample_record(sample_repo_info, sample_tree, sample_commits, sample_languages, sample_readme):
    return AggregateRecord(
        info=sample_repo_info,
        readme=sample_readme,
        files=sample_tree.entries,
        commits=sample_commits,
        languages=sample_languages,
    )


@pytest.fixture
def mock_vcs_provider(
    sample_repo_info, sample_tree, sample_commits, sample_languages, sample_readme
):
    provider = MagicMock(spec=VCSProvider)
    provider.get_repo_info = AsyncMock(return_value=sample_repo_info)
    provider.get_readme = AsyncMock(return_value=sample_readme)
    provider.get_tree = AsyncMock(return_value=sample_tree)
    provider.get_commits = AsyncMock(return_value=sample_commits)
    provider.get_languages = AsyncMock(return_value=sample_languages)
    return provider


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMRuntimeConfig(provider="google", model="test-model")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content=FENCED_REPLY,
            usage=TokenUsage(input_tokens=100, output_tokens=40),
            model="test-model",
        )
    )
    return provider


@pytest.fixture
def sample_config():
    return RepoGraderConfig()


@pytest.fixture(autouse=True)
def reset_repograder_logger():
    """Undo configure_logging() so caplog keeps seeing repograder records."""
    yield
    logger = logging.getLogger("repograder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
