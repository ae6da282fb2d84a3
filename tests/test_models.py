"""Tests for data models."""
from __future__ import annotations

import pytest

from quiz_synth.models import (
    FillInTheBlankQuestion,
    GenerationRequest,
    GenerationResult,
    IdentificationQuestion,
    MultipleChoiceQuestion,
    QuestionCounts,
    QuestionSet,
    TrueFalseQuestion,
)


class TestQuestionSet:
    def test_empty(self):
        qs = QuestionSet()
        assert qs.is_empty()
        assert qs.total == 0
        assert qs.to_dict() == {
            "multipleChoice": [],
            "trueFalse": [],
            "fillInTheBlank": [],
            "identification": [],
        }

    def test_to_dict_uses_wire_names(self):
        qs = QuestionSet(
            multiple_choice=[MultipleChoiceQuestion("Q?", ["a", "b", "c", "d"], 2)],
            true_false=[TrueFalseQuestion("S.", False)],
            fill_in_the_blank=[FillInTheBlankQuestion("A ______ day.", "sunny")],
            identification=[IdentificationQuestion("Identify it.", "it")],
        )
        d = qs.to_dict()
        assert d["multipleChoice"] == [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": 2}]
        assert d["trueFalse"] == [{"statement": "S.", "answer": False}]
        assert d["fillInTheBlank"] == [{"sentence": "A ______ day.", "answer": "sunny"}]
        assert d["identification"] == [{"question": "Identify it.", "answer": "it"}]
        assert qs.total == 4


class TestQuestionCounts:
    def test_total_and_lookup(self):
        c = QuestionCounts(mcq=3, true_false=3, fill_blank=3, identification=1)
        assert c.total == 10
        assert c.for_type("identification") == 1
        assert c.for_type("multiple-choice") == 3


class TestGenerationRequest:
    def test_defaults(self):
        r = GenerationRequest("text")
        assert r.difficulty == "moderate"
        assert r.number_of_questions == 10
        assert r.question_types is None

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError, match="Unknown difficulty"):
            GenerationRequest("text", difficulty="hard")

    def test_question_types_normalized(self):
        r = GenerationRequest("text", question_types=["true-false", "essay", "true-false"])
        assert r.question_types == ["true-false"]

    def test_empty_question_types_mean_all(self):
        assert GenerationRequest("text", question_types=[]).question_types is None
        assert GenerationRequest("text", question_types=["essay"]).question_types is None


class TestGenerationResult:
    def test_to_dict(self):
        result = GenerationResult(QuestionSet(), "rule-based", fallback_reason="down")
        assert result.to_dict() == {"questions": QuestionSet().to_dict(), "method": "rule-based"}
