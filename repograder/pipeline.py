"""Pipeline orchestrator: location string in, assessment out."""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, ConfigDict

from repograder.assessment import Assessment, request_assessment
from repograder.config import RepoGraderConfig
from repograder.errors import (
    AnalysisError,
    GenerationError,
    InvalidIdentifierError,
    PipelineStage,
)
from repograder.identifier import RepoIdentifier, parse_repo_location
from repograder.llm import LLMProvider, create_llm_provider
from repograder.profile import ProfileBuilder, QualityProfile
from repograder.vcs import AggregateRecord, SourceAggregator, VCSProvider, create_provider

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    """What the pipeline hands to a renderer."""

    model_config = ConfigDict(frozen=True)

    repo: str
    url: str
    profile: QualityProfile
    assessment: Assessment


class AnalysisPipeline:
    """Runs one repository through parse, aggregate, profile and request.

    Pipeline:
        location -> RepoIdentifier -> AggregateRecord -> QualityProfile -> Assessment

    Any failure ends the run: the AnalysisError is tagged with the stage that
    was running (``pipeline_stage``) and re-raised unchanged. Nothing is
    retried. Providers are created per run unless injected, so concurrent
    runs share no state.
    """

    def __init__(
        self,
        config: RepoGraderConfig | None = None,
        *,
        vcs_provider: VCSProvider | None = None,
        llm: LLMProvider | None = None,
    ) -> None:
        self.config = config or RepoGraderConfig()
        self._vcs_provider = vcs_provider
        self._llm = llm

    async def run(
        self,
        location: str,
        credential: str | None = None,
        *,
        hosting_token: str | None = None,
    ) -> AnalysisResult:
        """Analyze the repository at ``location``.

        Args:
            location: Any string containing ``<host>/<owner>/<project>``.
            credential: API key for the text-generation service.
            hosting_token: Optional hosting API token.
        """
        stage = PipelineStage.IDLE
        try:
            stage = self._enter(PipelineStage.PARSING)
            identifier = self.parse(location)

            stage = self._enter(PipelineStage.AGGREGATING)
            record = await self._aggregate(identifier, hosting_token)

            stage = self._enter(PipelineStage.PROFILING)
            profile = ProfileBuilder.from_aggregate(record)

            stage = self._enter(PipelineStage.REQUESTING)
            llm = self._llm or self._create_llm(credential)
            assessment = await request_assessment(profile, llm)
        except AnalysisError as e:
            e.pipeline_stage = stage
            logger.debug("Pipeline %s -> %s", stage.value, PipelineStage.FAILED.value)
            raise

        self._enter(PipelineStage.DONE)
        return AnalysisResult(
            repo=identifier.full_name,
            url=record.info.url or f"https://{self.config.vcs.host}/{identifier.full_name}",
            profile=profile,
            assessment=assessment,
        )

    async def build_profile(
        self, location: str, *, hosting_token: str | None = None
    ) -> QualityProfile:
        """Run only the parse, aggregate and profile stages."""
        stage = PipelineStage.PARSING
        try:
            identifier = self.parse(location)
            stage = PipelineStage.AGGREGATING
            record = await self._aggregate(identifier, hosting_token)
        except AnalysisError as e:
            e.pipeline_stage = stage
            raise
        return ProfileBuilder.from_aggregate(record)

    async def _aggregate(
        self, identifier: RepoIdentifier, hosting_token: str | None
    ) -> AggregateRecord:
        provider = self._vcs_provider or create_provider(self.config.vcs, hosting_token)
        aggregator = SourceAggregator(provider, self.config.vcs.commit_page_size)
        return await aggregator.fetch(identifier.owner, identifier.project)

    def parse(self, location: str) -> RepoIdentifier:
        identifier = parse_repo_location(location, host=self.config.vcs.host)
        if identifier is None:
            raise InvalidIdentifierError(location)
        return identifier

    def _create_llm(self, credential: str | None) -> LLMProvider:
        try:
            return create_llm_provider(self.config.llm, api_key=credential)
        except ValueError as e:
            raise GenerationError(str(e)) from e

    @staticmethod
    def _enter(stage: PipelineStage) -> PipelineStage:
        logger.debug("Pipeline stage: %s", stage.value)
        return stage


def run_analysis(
    location: str,
    credential: str | None = None,
    config: RepoGraderConfig | None = None,
    *,
    hosting_token: str | None = None,
) -> AnalysisResult:
    """Synchronous wrapper around AnalysisPipeline.run()."""
    pipeline = AnalysisPipeline(config)
    return asyncio.run(pipeline.run(location, credential, hosting_token=hosting_token))
