"""Quality profile derivation."""

from repograder.profile.builder import ProfileBuilder
from repograder.profile.models import NO_DESCRIPTION, NO_README, QualityProfile

__all__ = [
    "NO_DESCRIPTION",
    "NO_README",
    "ProfileBuilder",
    "QualityProfile",
]
