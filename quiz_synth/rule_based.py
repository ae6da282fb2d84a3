"""Deterministic question synthesis from raw text.

Used when the LLM path is unavailable. Questions are built around frequent
key terms and capitalized "entities" pulled from the text itself, so the
output is only as good as the source; short or terse input yields fewer
(possibly zero) questions rather than an error.
"""
from __future__ import annotations

import logging
import re

from quiz_synth.distribution import distribute_questions
from quiz_synth.models import (
    FillInTheBlankQuestion,
    IdentificationQuestion,
    MultipleChoiceQuestion,
    QuestionSet,
    TrueFalseQuestion,
)
from quiz_synth.rng import PythonRandom, RandomSource, shuffled
from quiz_synth.text import (
    extract_key_terms,
    extract_named_entities,
    extract_sentences,
    preprocess,
)

_log = logging.getLogger("quiz_synth.rules")

BLANK_MARKER = "______"

_LEADING_CONNECTIVE = re.compile(
    r"^(However|Moreover|Furthermore|Additionally|Therefore|Thus|Hence)\b,?\s*",
    re.IGNORECASE,
)

# Four stems per difficulty, rotated by question index
MCQ_STEMS = {
    "easy": [
        "What is {term}?",
        "According to the text, {term} is:",
        "Which statement about {term} is correct?",
        "What does the text say about {term}?",
    ],
    "moderate": [
        "According to the text, what is true about {term}?",
        "Based on the information provided, which statement about {term} is correct?",
        "The text indicates that {term}:",
        "Which of the following does the passage state about {term}?",
    ],
    "challenging": [
        "Which of the following best describes {term} according to the passage?",
        "Analyze the relationship between {term} and the main concept discussed:",
        "What can be inferred about {term} from the text?",
        "Which claim about {term} is best supported by the passage?",
    ],
}

DISTRACTOR_TEMPLATES = [
    "{t0} is primarily used for different purposes than described",
    "{e0} has opposite characteristics to those mentioned",
    "The relationship between {t0} and {t1} is inverse",
    "{t1} functions differently than stated in the passage",
    "The process involving {t2} occurs in reverse order",
    "{e1} has contradictory properties",
]

GENERIC_FALSE_STATEMENTS = {
    "easy": [
        "{term} is not mentioned in the text",
    ],
    "moderate": [
        "{term} is not mentioned in the text",
        "The text provides no information about {term}",
    ],
    "challenging": [
        "{term} is not mentioned in the text",
        "The text provides no information about {term}",
        "{term} is described as having no significance",
    ],
}

IDENTIFICATION_TEMPLATE = "Identify the concept related to: {term}"


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return _capitalize(replacement)
    return replacement


def _swap(mapping: dict[str, str]):
    """Build a single-pass word substitution from *mapping*."""
    # Longest first so "is not" wins over "is"
    keys = sorted(mapping, key=len, reverse=True)
    pattern = re.compile(
        r"\b(" + "|".join(re.escape(k) for k in keys) + r")\b", re.IGNORECASE
    )

    def transform(sentence: str) -> str:
        return pattern.sub(
            lambda m: _match_case(m.group(0), mapping[m.group(0).lower()]),
            sentence,
        )

    return transform


POLARITY_FLIPS = [
    _swap({"is not": "is", "is": "is not"}),
    _swap({"are not": "are", "are": "are not"}),
    _swap({"can": "cannot"}),
    _swap({"will": "will not"}),
    _swap({"always": "never", "never": "always"}),
    _swap({
        "increases": "decreases", "increase": "decrease",
        "decreases": "increases", "decrease": "increase",
    }),
    _swap({"improves": "worsens", "improve": "worsen"}),
    _swap({"enhances": "reduces", "enhance": "reduce"}),
    _swap({"positive": "negative", "negative": "positive"}),
    _swap({"high": "low", "low": "high"}),
    _swap({"more": "less", "less": "more"}),
]


def simplify_statement(sentence: str) -> str:
    """Drop a leading discourse connective and collapse whitespace."""
    s = _LEADING_CONNECTIVE.sub("", sentence.strip())
    return re.sub(r"\s+", " ", s).strip()


def _term_pattern(term: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def _contains(sentence: str, term: str) -> bool:
    return _term_pattern(term).search(sentence) is not None


def _first_term(sentence: str, terms: list[str]) -> str | None:
    return next((t for t in terms if _contains(sentence, t)), None)


class RuleBasedGenerator:
    """Synthesize a :class:`QuestionSet` without any external service.

    ``rng`` drives option shuffling, distractor choice and the order in which
    negation transforms are tried; pass a fixed source for reproducible output.
    """

    def __init__(self, rng: RandomSource | None = None):
        self.rng = rng or PythonRandom()

    def generate(
        self,
        text: str,
        difficulty: str = "moderate",
        number_of_questions: int = 10,
        question_types: list[str] | None = None,
    ) -> QuestionSet:
        pre = preprocess(text)
        sentences = pre.sentences or extract_sentences(pre.clean, loose=True)
        key_terms = extract_key_terms(pre.words)
        entities = extract_named_entities(pre.clean)
        counts = distribute_questions(number_of_questions, question_types)

        _log.info(
            "Rule-based: %d sentences, %d key terms, %d entities",
            len(sentences), len(key_terms), len(entities),
        )

        consumed: set[str] = set()
        mcqs = self.generate_multiple_choice(
            sentences, key_terms, entities, difficulty, counts.mcq, consumed,
        )
        true_false = self.generate_true_false(
            sentences, key_terms, difficulty, counts.true_false,
        )
        blanks = self.generate_fill_in_the_blank(
            sentences, key_terms, entities, counts.fill_blank, consumed,
        )
        identification = self.generate_identification(
            key_terms, counts.identification, consumed,
        )

        questions = QuestionSet(
            multiple_choice=mcqs,
            true_false=true_false,
            fill_in_the_blank=blanks,
            identification=identification,
        )
        if questions.total < counts.total:
            _log.info(
                "Rule-based: produced %d of %d requested questions",
                questions.total, counts.total,
            )
        return questions

    # ── Multiple choice ──────────────────────────────────────────────────

    def generate_multiple_choice(
        self,
        sentences: list[str],
        key_terms: list[str],
        entities: list[str],
        difficulty: str,
        count: int,
        consumed: set[str] | None = None,
    ) -> list[MultipleChoiceQuestion]:
        if count <= 0 or not key_terms:
            return []
        stems = MCQ_STEMS.get(difficulty, MCQ_STEMS["moderate"])
        important = [s for s in sentences if _first_term(s, key_terms)][:count]

        questions = []
        for index, sentence in enumerate(important):
            term = _first_term(sentence, key_terms)
            if consumed is not None:
                consumed.add(term.lower())
            correct = simplify_statement(sentence)
            distractors = self._distractors(term, key_terms, entities)

            options = [correct, *distractors]
            order = shuffled(list(range(len(options))), self.rng)
            questions.append(MultipleChoiceQuestion(
                question=stems[index % len(stems)].format(term=term),
                options=[options[i] for i in order],
                correct_answer=order.index(0),
            ))
        return questions

    def _distractors(self, term: str, key_terms: list[str], entities: list[str]) -> list[str]:
        others = [t for t in key_terms if t != term]
        slots = {
            "t0": others[0] if len(others) > 0 else "the subject",
            "t1": others[1] if len(others) > 1 else "the topic",
            "t2": others[2] if len(others) > 2 else "the concept",
            "e0": entities[0] if len(entities) > 0 else "the entity",
            "e1": entities[1] if len(entities) > 1 else "the mentioned entity",
        }
        picked = shuffled(DISTRACTOR_TEMPLATES, self.rng)[:3]
        return [_capitalize(t.format(**slots)) for t in picked]

    # ── True / false ─────────────────────────────────────────────────────

    def create_false_statement(self, sentence: str, key_terms: list[str]) -> str:
        """Flip the polarity of *sentence*; never returns it unchanged.

        Transforms are tried in random order and the first one that changes
        the text wins. When none applies, a generic false claim about a key
        term is returned instead.
        """
        for flip in shuffled(POLARITY_FLIPS, self.rng):
            modified = flip(sentence)
            if modified != sentence:
                return simplify_statement(modified)

        term = key_terms[0] if key_terms else "the subject"
        statement = _capitalize(f"{term} has no relevance to the topics discussed in the text")
        if statement == sentence:
            statement = f"The text says nothing about {term}"
        return statement

    def generate_true_false(
        self,
        sentences: list[str],
        key_terms: list[str],
        difficulty: str,
        count: int,
    ) -> list[TrueFalseQuestion]:
        if count <= 0:
            return []
        questions: list[TrueFalseQuestion] = []
        seen: set[str] = set()
        referenced: set[str] = set()

        def add(statement: str, answer: bool) -> None:
            if statement not in seen:
                seen.add(statement)
                questions.append(TrueFalseQuestion(statement=statement, answer=answer))

        for sentence in sentences:
            if len(questions) >= count:
                break
            if _first_term(sentence, key_terms) is None:
                continue
            referenced.update(t for t in key_terms if _contains(sentence, t))
            true_statement = simplify_statement(sentence)
            add(true_statement, True)
            false_statement = self.create_false_statement(sentence, key_terms)
            if false_statement != true_statement:
                add(false_statement, False)

        templates = GENERIC_FALSE_STATEMENTS.get(difficulty, GENERIC_FALSE_STATEMENTS["moderate"])
        unused = [t for t in key_terms if t not in referenced]
        for i, term in enumerate(unused):
            if len(questions) >= count:
                break
            add(_capitalize(templates[i % len(templates)].format(term=term)), False)

        return questions[:count]

    # ── Fill in the blank ────────────────────────────────────────────────

    def generate_fill_in_the_blank(
        self,
        sentences: list[str],
        key_terms: list[str],
        entities: list[str],
        count: int,
        consumed: set[str] | None = None,
    ) -> list[FillInTheBlankQuestion]:
        if count <= 0:
            return []
        lowered = {t.lower() for t in key_terms}
        candidates = key_terms + [e for e in entities if e.lower() not in lowered]

        questions = []
        for sentence in sentences:
            if len(questions) >= count:
                break
            statement = simplify_statement(sentence)
            for term in candidates:
                blanked, n = _term_pattern(term).subn(BLANK_MARKER, statement)
                if n:
                    questions.append(FillInTheBlankQuestion(sentence=blanked, answer=term))
                    if consumed is not None:
                        consumed.add(term.lower())
                    break
        return questions

    # ── Identification ───────────────────────────────────────────────────

    def generate_identification(
        self,
        key_terms: list[str],
        count: int,
        consumed: set[str] | None = None,
    ) -> list[IdentificationQuestion]:
        if count <= 0:
            return []
        consumed = consumed or set()
        return [
            IdentificationQuestion(
                question=IDENTIFICATION_TEMPLATE.format(term=term),
                answer=term,
            )
            for term in key_terms
            if term.lower() not in consumed
        ][:count]
