"""Tests for prompt templates and formatting."""
from __future__ import annotations

import re

from quiz_synth.models import QuestionCounts
from quiz_synth.prompts import build_question_prompt, format_counts, format_empty_rules


class TestFormatCounts:
    def test_only_non_zero(self):
        result = format_counts(QuestionCounts(mcq=2, identification=1))
        assert result.splitlines() == [
            "- Generate exactly 2 Multiple Choice Questions "
            "(4 options each with specific, relevant answers from the text)",
            "- Generate exactly 1 Identification Questions",
        ]

    def test_empty(self):
        assert format_counts(QuestionCounts()) == ""


class TestFormatEmptyRules:
    def test_zero_types_listed(self):
        result = format_empty_rules(QuestionCounts(mcq=2, identification=1))
        assert '"trueFalse" must be an empty array []' in result
        assert '"fillInTheBlank" must be an empty array []' in result
        assert "multipleChoice" not in result


class TestBuildQuestionPrompt:
    def test_all_placeholders_filled(self):
        result = build_question_prompt("Text.", "challenging", QuestionCounts(1, 1, 1, 1))
        for name in ("counts_list", "total", "difficulty", "excerpt", "empty_rules", "multipleChoice_example"):
            assert "{" + name + "}" not in result
        assert "Difficulty Level: challenging" in result
        assert "Ensure questions match the challenging difficulty level" in result

    def test_schema_lists_all_four_arrays(self):
        result = build_question_prompt("Text.", "easy", QuestionCounts(mcq=1))
        for key in ("multipleChoice", "trueFalse", "fillInTheBlank", "identification"):
            assert re.search(rf'"{key}": \[', result)
