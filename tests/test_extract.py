"""Tests for repograder.assessment.extract: locating JSON in model replies."""

import pytest

from repograder.assessment.extract import (
    UNPARSABLE,
    extract_json_object,
    strip_code_fences,
)
from repograder.errors import GenerationError

OBJECT = {"level": "INTERMEDIATE", "confidence": 70, "summary": "ok", "next_actions": ["a", "b", "c"]}
RAW = '{"level":"INTERMEDIATE","confidence":70,"summary":"ok","next_actions":["a","b","c"]}'


class TestStripCodeFences:
    def test_removes_tagged_fence(self):
        assert strip_code_fences("```json\n{}\n```") == "{}\n"

    def test_removes_bare_fence(self):
        assert strip_code_fences("```\n{}\n```") == "{}\n"

    def test_leaves_plain_text(self):
        assert strip_code_fences("no fences here") == "no fences here"


class TestExtractJsonObject:
    def test_unfenced(self):
        assert extract_json_object(RAW) == OBJECT

    def test_fenced_matches_unfenced(self):
        assert extract_json_object(f"```json\n{RAW}\n```") == extract_json_object(RAW)

    def test_fence_without_language_tag(self):
        assert extract_json_object(f"```\n{RAW}\n```") == OBJECT

    def test_surrounding_whitespace(self):
        assert extract_json_object(f"\n\n   {RAW}   \n") == OBJECT

    def test_commentary_around_object(self):
        text = f"Sure! Here is the review:\n{RAW}\nHope this helps."
        assert extract_json_object(text) == OBJECT

    def test_pretty_printed_object(self):
        text = '```json\n{\n  "level": "BEGINNER",\n  "nested": {"k": 1}\n}\n```'
        assert extract_json_object(text) == {"level": "BEGINNER", "nested": {"k": 1}}

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "I cannot help with that.",
            "```json\n```",
            "{not json}",
            '{"level": "BEGINNER"',
        ],
    )
    def test_absent_or_broken_object_fails(self, text):
        with pytest.raises(GenerationError) as exc_info:
            extract_json_object(text)
        assert exc_info.value.reason == UNPARSABLE

    def test_two_objects_span_fails(self):
        # greedy span covers both objects, which is not valid JSON
        with pytest.raises(GenerationError):
            extract_json_object('{"a": 1} and {"b": 2}')

    def test_array_is_not_an_object(self):
        with pytest.raises(GenerationError):
            extract_json_object("[1, 2, 3]")
