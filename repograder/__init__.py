"""repograder - grade a hosted repository with a generative-text review."""

from repograder.assessment import Assessment, SkillLevel
from repograder.config import RepoGraderConfig, load_config
from repograder.errors import (
    AnalysisError,
    FetchError,
    FetchStage,
    GenerationError,
    InvalidIdentifierError,
    PipelineStage,
)
from repograder.identifier import RepoIdentifier, parse_repo_location
from repograder.pipeline import AnalysisPipeline, AnalysisResult, run_analysis
from repograder.profile import ProfileBuilder, QualityProfile
from repograder.vcs import AggregateRecord, SourceAggregator

__version__ = "0.1.0"

__all__ = [
    "AggregateRecord",
    "AnalysisError",
    "AnalysisPipeline",
    "AnalysisResult",
    "Assessment",
    "FetchError",
    "FetchStage",
    "GenerationError",
    "InvalidIdentifierError",
    "PipelineStage",
    "ProfileBuilder",
    "QualityProfile",
    "RepoGraderConfig",
    "RepoIdentifier",
    "SkillLevel",
    "SourceAggregator",
    "load_config",
    "parse_repo_location",
    "run_analysis",
]
