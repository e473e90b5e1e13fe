"""
Unit Tests for extracting JSON objects from model replies
"""
import pytest

from stats_api.core.exceptions import AIResponseParseError
from stats_api.utils.response_parser import extract_json_object


class TestExtractJsonObject:

    def test_plain_json(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_json(self):
        text = 'Voici le rapport:\n```json\n{"meta": {"language": "fr"}}\n```\nBonne journée'

        assert extract_json_object(text) == {"meta": {"language": "fr"}}

    def test_fence_without_language_tag(self):
        assert extract_json_object('```\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_surrounding_prose(self):
        assert extract_json_object('Sure! {"value": 72} Hope this helps.') == {"value": 72}

    @pytest.mark.parametrize("text", ["not json", "[1, 2, 3]", "{broken", ""])
    def test_rejects_non_objects(self, text):
        with pytest.raises(AIResponseParseError):
            extract_json_object(text)

    @pytest.mark.parametrize("text", [
        '{"value": NaN}',
        '{"value": Infinity}',
        '```json\n{"value": -Infinity}\n```',
    ])
    def test_rejects_non_finite_numbers(self, text):
        with pytest.raises(AIResponseParseError, match="non-finite"):
            extract_json_object(text)
