"""Pydantic models for the assessment returned by the text service."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEXT_ACTION_COUNT = 3


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class Assessment(BaseModel):
    """Structured verdict on a repository.

    Built from untrusted model output, so every field is checked: ``level``
    is normalized to upper case, ``confidence`` must be an integer in
    0-100, and ``next_actions`` must hold at least three entries (extras are
    dropped).
    """

    model_config = ConfigDict(frozen=True)

    level: SkillLevel
    confidence: int = Field(ge=0, le=100)
    summary: str = Field(min_length=1)
    next_actions: list[str]

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("summary")
    @classmethod
    def validate_summary(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("summary cannot be empty or whitespace")
        return v.strip()

    @field_validator("next_actions")
    @classmethod
    def validate_next_actions(cls, v: list[str]) -> list[str]:
        actions = [a.strip() for a in v]
        if any(not a for a in actions):
            raise ValueError("next_actions cannot contain empty entries")
        if len(actions) < NEXT_ACTION_COUNT:
            raise ValueError(
                f"expected {NEXT_ACTION_COUNT} next_actions, got {len(actions)}"
            )
        return actions[:NEXT_ACTION_COUNT]
