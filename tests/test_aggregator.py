"""Tests for repograder.vcs.aggregator: fetch order and failure tolerance."""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock

from repograder.errors import FetchError, FetchStage
from repograder.vcs.aggregator import SourceAggregator
from repograder.vcs.base import VCSError
from repograder.vcs.models import TreeListing


def _vcs_error(operation, status_code=None):
    return VCSError(operation, RuntimeError("boom"), status_code=status_code)


class TestAggregatorSuccess:
    async def test_returns_complete_record(self, mock_vcs_provider, sample_readme):
        record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert record.info.full_name == "acme/widget"
        assert record.readme == sample_readme
        assert [f.path for f in record.files] == [
            ".gitignore",
            "tests/test_widget.js",
            "index.js",
        ]
        assert [c.message for c in record.commits] == ["fix bug", "Add feature X"]
        assert list(record.languages) == ["JS", "CSS"]
        assert record.tree_truncated is False

    async def test_reads_keyed_by_owner_project(self, mock_vcs_provider):
        await SourceAggregator(mock_vcs_provider, commit_page_size=7).fetch("acme", "widget")

        mock_vcs_provider.get_repo_info.assert_awaited_once_with("acme/widget")
        mock_vcs_provider.get_readme.assert_awaited_once_with("acme/widget")
        mock_vcs_provider.get_tree.assert_awaited_once_with("acme/widget", "main")
        mock_vcs_provider.get_commits.assert_awaited_once_with("acme/widget", 7)
        mock_vcs_provider.get_languages.assert_awaited_once_with("acme/widget")

    async def test_tree_uses_default_branch(self, mock_vcs_provider, sample_repo_info):
        mock_vcs_provider.get_repo_info = AsyncMock(
            return_value=sample_repo_info.model_copy(update={"default_branch": "trunk"})
        )
        await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")
        mock_vcs_provider.get_tree.assert_awaited_once_with("acme/widget", "trunk")

    async def test_truncated_tree_is_recorded_and_logged(self, mock_vcs_provider, sample_tree, caplog):
        mock_vcs_provider.get_tree = AsyncMock(
            return_value=TreeListing(entries=sample_tree.entries, truncated=True)
        )
        with caplog.at_level(logging.WARNING, logger="repograder"):
            record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert record.tree_truncated is True
        assert "truncated" in caplog.text

    async def test_empty_readme_is_not_absent(self, mock_vcs_provider):
        mock_vcs_provider.get_readme = AsyncMock(return_value="")
        record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")
        assert record.readme == ""


class TestAggregatorReadmeOptional:
    async def test_missing_readme_degrades_to_none(self, mock_vcs_provider):
        mock_vcs_provider.get_readme = AsyncMock(side_effect=_vcs_error("get_readme", 404))
        record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert record.readme is None
        assert len(record.commits) == 2

    async def test_transport_failure_on_readme_degrades_to_none(self, mock_vcs_provider, caplog):
        mock_vcs_provider.get_readme = AsyncMock(side_effect=_vcs_error("get_readme"))
        with caplog.at_level(logging.WARNING, logger="repograder"):
            record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert record.readme is None
        assert "README fetch failed" in caplog.text


class TestAggregatorRequiredFailures:
    async def test_repo_info_failure_stops_everything(self, mock_vcs_provider):
        mock_vcs_provider.get_repo_info = AsyncMock(side_effect=_vcs_error("get_repo_info", 404))

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.stage is FetchStage.REPO_INFO
        assert exc_info.value.status_code == 404
        mock_vcs_provider.get_readme.assert_not_called()
        mock_vcs_provider.get_tree.assert_not_called()
        mock_vcs_provider.get_commits.assert_not_called()
        mock_vcs_provider.get_languages.assert_not_called()

    @pytest.mark.parametrize(
        "method, stage",
        [
            ("get_tree", FetchStage.TREE),
            ("get_commits", FetchStage.COMMITS),
            ("get_languages", FetchStage.LANGUAGES),
        ],
    )
    async def test_required_failure_names_stage(self, mock_vcs_provider, method, stage):
        setattr(mock_vcs_provider, method, AsyncMock(side_effect=_vcs_error(method, 500)))

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.stage is stage
        assert exc_info.value.status_code == 500
        assert stage.value in str(exc_info.value)

    async def test_transport_failure_has_no_status(self, mock_vcs_provider):
        mock_vcs_provider.get_languages = AsyncMock(side_effect=_vcs_error("get_languages"))

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.status_code is None
        assert "transport failure" in str(exc_info.value)

    async def test_earliest_stage_reported_when_several_fail(self, mock_vcs_provider):
        mock_vcs_provider.get_tree = AsyncMock(side_effect=_vcs_error("get_tree", 409))
        mock_vcs_provider.get_languages = AsyncMock(side_effect=_vcs_error("get_languages", 500))

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.stage is FetchStage.TREE

    async def test_required_failure_wins_over_readme_failure(self, mock_vcs_provider):
        mock_vcs_provider.get_readme = AsyncMock(side_effect=_vcs_error("get_readme", 404))
        mock_vcs_provider.get_commits = AsyncMock(side_effect=_vcs_error("get_commits", 403))

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.stage is FetchStage.COMMITS

    async def test_pending_reads_cancelled_on_failure(self, mock_vcs_provider, sample_tree):
        cancelled = asyncio.Event()

        async def slow_tree(repo_id, ref):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return sample_tree

        mock_vcs_provider.get_tree = AsyncMock(side_effect=slow_tree)
        mock_vcs_provider.get_commits = AsyncMock(side_effect=_vcs_error("get_commits", 500))

        with pytest.raises(FetchError):
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert cancelled.is_set()

    async def test_fetch_error_chains_vcs_error(self, mock_vcs_provider):
        original = _vcs_error("get_tree", 404)
        mock_vcs_provider.get_tree = AsyncMock(side_effect=original)

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.__cause__ is original

    @pytest.mark.parametrize("error", [AssertionError("unsupported encoding"), KeyError("sha")])
    async def test_non_vcs_error_becomes_fetch_error(self, mock_vcs_provider, error):
        mock_vcs_provider.get_commits = AsyncMock(side_effect=error)

        with pytest.raises(FetchError) as exc_info:
            await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert exc_info.value.stage is FetchStage.COMMITS
        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is error

    async def test_non_vcs_readme_error_degrades_to_none(self, mock_vcs_provider, caplog):
        mock_vcs_provider.get_readme = AsyncMock(side_effect=AssertionError("unsupported encoding: none"))
        with caplog.at_level(logging.WARNING, logger="repograder"):
            record = await SourceAggregator(mock_vcs_provider).fetch("acme", "widget")

        assert record.readme is None
        assert "README fetch failed" in caplog.text
