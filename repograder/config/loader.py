"""Config file discovery and loading.

Files are searched in priority order and the first one holding a YAML mapping
wins; files are never merged. ``${VAR}`` and ``${VAR:-fallback}`` references
in string values are replaced from the environment before validation.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import RepoGraderConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = "repograder.yaml"
USER_CONFIG_DIR = ".repograder"

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path(PROJECT_CONFIG_NAME), Path.home() / USER_CONFIG_DIR / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> RepoGraderConfig:
    """Load the first usable config file, or defaults when there is none.

    Raises:
        ValueError: ``cli_path`` does not exist, or the chosen file is not
            valid YAML, not a mapping, or fails validation.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            logger.debug("Skipping empty config file %s", path)
            continue
        try:
            config = RepoGraderConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return RepoGraderConfig()


def _read_mapping(path: Path) -> dict[str, Any] | None:
    """Parse ``path``; None for an empty document."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None or isinstance(raw, dict):
        return raw
    raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")


def _expand_env_vars(obj: Any) -> Any:
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1)) or m.group(2) or "", obj)
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


# Default YAML template for `repograder config init`
DEFAULT_CONFIG_TEMPLATE = """\
# repograder.yaml

# Text generation
llm:
  provider: "google"           # google | anthropic | openai
  model: "gemini-2.5-flash-lite"
  api_key_env: "GEMINI_API_KEY"
  max_tokens: 1024
  temperature: 0.7
  timeout: 60                  # seconds

# Repository hosting
vcs:
  provider: "github"
  host: "github.com"
  base_url: "https://api.github.com"
  token_env: "GITHUB_TOKEN"    # optional, raises the anonymous rate limit
  commit_page_size: 20
  timeout: 15                  # seconds per request

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
