"""Profile builder: derives quality signals from an AggregateRecord."""

from __future__ import annotations

from repograder.profile.models import NO_DESCRIPTION, NO_README, QualityProfile
from repograder.vcs.models import AggregateRecord

README_PREVIEW_CHARS = 500
SAMPLE_COMMIT_COUNT = 5

# Case-sensitive substring markers, matched against every path.
_TEST_MARKERS = ("test", "spec", "__tests__")
_DOCS_MARKER = "docs/"
_CI_MARKER = ".github/workflows"
_LICENSE_MARKER = "LICENSE"
_GITIGNORE_PATH = ".gitignore"


class ProfileBuilder:
    """Transforms aggregated hosting data into a QualityProfile."""

    @staticmethod
    def from_aggregate(record: AggregateRecord) -> QualityProfile:
        """Build a QualityProfile from an AggregateRecord. Never raises."""
        readme = record.readme
        paths = [entry.path for entry in record.files]
        messages = [c.message for c in record.commits]

        return QualityProfile(
            repo_name=record.info.name,
            description=record.info.description or NO_DESCRIPTION,
            stars=record.info.stars,
            languages=_format_languages(record.languages),
            has_readme=readme is not None,
            readme_length=len(readme) if readme is not None else 0,
            readme_preview=readme[:README_PREVIEW_CHARS] if readme is not None else NO_README,
            file_count=len(record.files),
            has_tests=_any_contains(paths, *_TEST_MARKERS),
            has_docs=_any_contains(paths, _DOCS_MARKER),
            has_ci=_any_contains(paths, _CI_MARKER),
            has_gitignore=_GITIGNORE_PATH in paths,
            has_license=_any_contains(paths, _LICENSE_MARKER),
            commit_count=len(record.commits),
            avg_message_length=_average_length(messages),
            sample_commits=messages[:SAMPLE_COMMIT_COUNT],
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_languages(langs: dict[str, int]) -> str:
    """Comma-separated language names in the order the platform returned them."""
    return ", ".join(langs)


def _any_contains(paths: list[str], *markers: str) -> bool:
    return any(marker in path for path in paths for marker in markers)


def _average_length(messages: list[str]) -> float:
    """Mean message length; 0.0 for an empty history."""
    if not messages:
        return 0.0
    return sum(len(m) for m in messages) / len(messages)
