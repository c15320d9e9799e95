"""Extract an owner/project pair from a free-form repository location."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_VCS_SUFFIX = ".git"


class RepoIdentifier(BaseModel):
    """An (owner, project) pair on the hosting platform."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    project: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.project}"


def _location_pattern(host: str) -> re.Pattern[str]:
    # Segments stop at path, query and fragment delimiters.
    return re.compile(re.escape(host) + r"/([^/?#\s]+)/([^/?#\s]+)")


def parse_repo_location(text: str, host: str = "github.com") -> RepoIdentifier | None:
    """Return the identifier found in ``text``, or None if there is none.

    Accepts anything containing ``<host>/<owner>/<project>``: browser URLs,
    clone URLs (``https://github.com/acme/widget.git``), or bare
    ``github.com/acme/widget``. A trailing ``.git`` is removed from the
    project name.
    """
    match = _location_pattern(host).search(text)
    if match is None:
        return None
    owner, project = match.group(1), match.group(2)
    if project.endswith(_VCS_SUFFIX):
        project = project[: -len(_VCS_SUFFIX)]
    if not project:
        return None
    return RepoIdentifier(owner=owner, project=project)
