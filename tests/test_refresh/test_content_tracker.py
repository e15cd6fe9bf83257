"""Tests for the content tracker predicate."""

import pytest

from resume_coach.refresh.content_tracker import should_attempt


class TestShouldAttempt:
    def test_new_content(self):
        assert should_attempt("Experience: built X.", "") is True

    def test_changed_content(self):
        assert should_attempt("v2", "v1") is True

    @pytest.mark.parametrize("content", ["", "   ", "\n\t \n"])
    def test_blank_content(self, content):
        assert should_attempt(content, "") is False

    def test_identical_content(self):
        assert should_attempt("same", "same") is False

    def test_whitespace_edit_counts_as_change(self):
        assert should_attempt("same ", "same") is True

    def test_case_sensitive(self):
        assert should_attempt("Built X", "built x") is True
