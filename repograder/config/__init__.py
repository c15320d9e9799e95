from .loader import load_config
from .models import (
    LLMSettings,
    RepoGraderConfig,
    VCSConfig,
)

__all__ = [
    "LLMSettings",
    "RepoGraderConfig",
    "VCSConfig",
    "load_config",
]
