from __future__ import annotations

from dataclasses import dataclass, field

DIFFICULTIES = ("easy", "moderate", "challenging")

MULTIPLE_CHOICE = "multiple-choice"
TRUE_FALSE = "true-false"
FILL_IN_BLANK = "fill-in-blank"
IDENTIFICATION = "identification"

# Fixed order; remainder units are handed out in this order
QUESTION_TYPES = (MULTIPLE_CHOICE, TRUE_FALSE, FILL_IN_BLANK, IDENTIFICATION)

METHOD_AI = "ai"
METHOD_RULE_BASED = "rule-based"


@dataclass
class MultipleChoiceQuestion:
    question: str
    options: list[str]
    correct_answer: int

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }


@dataclass
class TrueFalseQuestion:
    statement: str
    answer: bool

    def to_dict(self) -> dict:
        return {"statement": self.statement, "answer": self.answer}


@dataclass
class FillInTheBlankQuestion:
    sentence: str  # contains BLANK_MARKER
    answer: str

    def to_dict(self) -> dict:
        return {"sentence": self.sentence, "answer": self.answer}


@dataclass
class IdentificationQuestion:
    question: str
    answer: str

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


@dataclass
class QuestionSet:
    multiple_choice: list[MultipleChoiceQuestion] = field(default_factory=list)
    true_false: list[TrueFalseQuestion] = field(default_factory=list)
    fill_in_the_blank: list[FillInTheBlankQuestion] = field(default_factory=list)
    identification: list[IdentificationQuestion] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.multiple_choice)
            + len(self.true_false)
            + len(self.fill_in_the_blank)
            + len(self.identification)
        )

    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict:
        return {
            "multipleChoice": [q.to_dict() for q in self.multiple_choice],
            "trueFalse": [q.to_dict() for q in self.true_false],
            "fillInTheBlank": [q.to_dict() for q in self.fill_in_the_blank],
            "identification": [q.to_dict() for q in self.identification],
        }


@dataclass
class QuestionCounts:
    mcq: int = 0
    true_false: int = 0
    fill_blank: int = 0
    identification: int = 0

    @property
    def total(self) -> int:
        return self.mcq + self.true_false + self.fill_blank + self.identification

    def for_type(self, question_type: str) -> int:
        return {
            MULTIPLE_CHOICE: self.mcq,
            TRUE_FALSE: self.true_false,
            FILL_IN_BLANK: self.fill_blank,
            IDENTIFICATION: self.identification,
        }[question_type]


def normalize_question_types(question_types: list[str] | None) -> list[str] | None:
    """Drop unknown names and duplicates, keeping caller order.

    Returns ``None`` when nothing usable is left, meaning "all types".
    """
    if not question_types:
        return None
    seen: list[str] = []
    for qtype in question_types:
        if qtype in QUESTION_TYPES and qtype not in seen:
            seen.append(qtype)
    return seen or None


@dataclass
class GenerationRequest:
    text: str
    difficulty: str = "moderate"
    number_of_questions: int = 10
    question_types: list[str] | None = None

    def __post_init__(self):
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(
                f"Unknown difficulty: {self.difficulty!r} "
                f"(expected one of {', '.join(DIFFICULTIES)})"
            )
        self.question_types = normalize_question_types(self.question_types)


@dataclass
class GenerationResult:
    questions: QuestionSet
    method: str  # ai | rule-based
    fallback_reason: str | None = None

    def to_dict(self) -> dict:
        return {"questions": self.questions.to_dict(), "method": self.method}
