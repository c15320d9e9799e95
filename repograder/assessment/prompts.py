"""Prompt templates for repository assessment."""

from __future__ import annotations

import math

from repograder.profile.models import QualityProfile

SAMPLE_SEPARATOR = " | "

SYSTEM_PROMPT = """\
You are a senior software engineer reviewing a student's GitHub repository. \
Be encouraging but honest.\
"""

USER_PROMPT_TEMPLATE = """\
Repository Analysis:
- Name: {repo_name}
- Description: {description}
- Tech Stack: {languages}
- Stars: {stars}

README:
- Exists: {has_readme}
- Length: {readme_length} characters
- Preview: {readme_preview}

Structure:
- Total files: {file_count}
- Has tests: {has_tests}
- Has docs: {has_docs}
- Has CI/CD: {has_ci}
- Has .gitignore: {has_gitignore}
- Has LICENSE: {has_license}

Commits (last {commit_count}):
- Average message length: {avg_message_length} chars
- Sample messages: {sample_commits}

Provide your response in this EXACT JSON format (no markdown, no extra text):
{{
  "level": "BEGINNER or INTERMEDIATE or ADVANCED",
  "confidence": 65,
  "summary": "2-3 sentence honest summary here",
  "next_actions": [
    "Add README installation steps",
    "Write 2 unit tests",
    "Improve commit messages"
  ]
}}

Important:
- "level" must be exactly one of BEGINNER, INTERMEDIATE, ADVANCED
- "confidence" should be an integer 0-100 representing how confident a recruiter would be in this code (based on professionalism, structure, documentation)
- "next_actions" should be exactly 3 SPECIFIC, actionable tasks (not general advice). Use imperative verbs. Keep each under 10 words.\
"""


class PromptTemplate:
    """Renders system/user prompts from a QualityProfile."""

    def render(self, profile: QualityProfile) -> tuple[str, str]:
        """Return (system_prompt, user_prompt) for the profile."""
        return SYSTEM_PROMPT, self._build_user_prompt(profile)

    @staticmethod
    def _build_user_prompt(profile: QualityProfile) -> str:
        fields = profile.model_dump()
        fields["has_readme"] = _flag(profile.has_readme)
        fields["has_tests"] = _flag(profile.has_tests)
        fields["has_docs"] = _flag(profile.has_docs)
        fields["has_ci"] = _flag(profile.has_ci)
        fields["has_gitignore"] = _flag(profile.has_gitignore)
        fields["has_license"] = _flag(profile.has_license)
        fields["languages"] = profile.languages or "unknown"
        fields["avg_message_length"] = _round_half_up(profile.avg_message_length)
        fields["sample_commits"] = SAMPLE_SEPARATOR.join(
            m.splitlines()[0] if m else m for m in profile.sample_commits
        )
        return USER_PROMPT_TEMPLATE.format(**fields)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
