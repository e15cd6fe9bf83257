"""Tests for JSON extraction utility."""

import pytest

from resume_coach.utils.json_parser import extract_json


class TestExtractJson:
    def test_direct_json(self):
        assert extract_json('{"suggestions": []}') == {"suggestions": []}

    def test_fenced_code_block(self):
        text = '```json\n{"suggestions": [{"matcher": "a", "advice": "b"}]}\n```'
        assert extract_json(text) == {"suggestions": [{"matcher": "a", "advice": "b"}]}

    def test_prose_around_fence(self):
        text = 'Here is the result:\n```json\n{"suggestions": null}\n```\nDone.'
        assert extract_json(text) == {"suggestions": None}

    def test_embedded_json(self):
        text = 'The review: {"suggestions": [], "note": "ok"} as shown above.'
        assert extract_json(text) == {"suggestions": [], "note": "ok"}

    def test_top_level_array_rejected(self):
        with pytest.raises(ValueError, match="object"):
            extract_json('[{"matcher": "a", "advice": "b"}]')

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Could not extract JSON"):
            extract_json("This is not JSON at all")

    def test_empty_text(self):
        with pytest.raises(ValueError):
            extract_json("   ")

    def test_truncated_json(self):
        with pytest.raises(ValueError):
            extract_json('{"suggestions": [{"matcher": "a", "advice": "b"')
