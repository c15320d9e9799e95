"""Assessment subsystem: prompt rendering, reply extraction, validation."""

from repograder.assessment.extract import extract_json_object, strip_code_fences
from repograder.assessment.models import Assessment, SkillLevel
from repograder.assessment.prompts import PromptTemplate
from repograder.assessment.requester import request_assessment

__all__ = [
    "Assessment",
    "PromptTemplate",
    "SkillLevel",
    "extract_json_object",
    "request_assessment",
    "strip_code_fences",
]
