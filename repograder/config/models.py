from pydantic import BaseModel, Field
from typing import Literal


class LLMSettings(BaseModel):
    provider: Literal["google", "anthropic", "openai"] = "google"
    model: str = "gemini-2.5-flash-lite"
    api_key_env: str = "GEMINI_API_KEY"
    max_tokens: int = Field(default=1024, gt=0)
    temperature: float = Field(default=0.7, ge=0, le=2)
    timeout: int = Field(default=60, gt=0)


class VCSConfig(BaseModel):
    provider: Literal["github"] = "github"
    host: str = "github.com"
    base_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"
    commit_page_size: int = Field(default=20, gt=0, le=100)
    timeout: int = Field(default=15, gt=0)


class RepoGraderConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
