"""Error taxonomy for the analysis pipeline."""

from __future__ import annotations

from enum import Enum


class PipelineStage(str, Enum):
    """Stages of a single analysis run."""

    IDLE = "idle"
    PARSING = "parsing"
    AGGREGATING = "aggregating"
    PROFILING = "profiling"
    REQUESTING = "requesting"
    DONE = "done"
    FAILED = "failed"


class FetchStage(str, Enum):
    """Hosting API reads performed by the aggregator, in request order."""

    REPO_INFO = "repo_info"
    README = "readme"
    TREE = "tree"
    COMMITS = "commits"
    LANGUAGES = "languages"


class AnalysisError(Exception):
    """Base class for every failure surfaced by the pipeline.

    ``pipeline_stage`` is filled in by the pipeline with the stage that was
    running when the error was raised.
    """

    pipeline_stage: PipelineStage | None = None


class InvalidIdentifierError(AnalysisError):
    """The location string does not contain a recognizable owner/project pair."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Invalid repository URL: {location!r}")


class FetchError(AnalysisError):
    """A required hosting API read failed."""

    def __init__(
        self, stage: FetchStage, status_code: int | None = None, detail: str = ""
    ) -> None:
        self.stage = stage
        self.status_code = status_code
        self.detail = detail
        status = f"status {status_code}" if status_code is not None else "transport failure"
        message = f"Failed to fetch repository data: {stage.value} ({status})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GenerationError(AnalysisError):
    """The text-generation call failed or its reply could not be used."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to generate assessment: {reason}")
