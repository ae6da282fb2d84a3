"""Generate a question set through an LLM completion service."""
from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import TYPE_CHECKING

from quiz_synth.distribution import distribute_questions
from quiz_synth.models import (
    FillInTheBlankQuestion,
    IdentificationQuestion,
    MultipleChoiceQuestion,
    QuestionSet,
    TrueFalseQuestion,
)
from quiz_synth.prompts import EXCERPT_CHARS, SYSTEM_PROMPT, build_question_prompt

if TYPE_CHECKING:
    from quiz_synth.providers.base import LLMProvider

_log = logging.getLogger("quiz_synth.ai")

ARRAY_KEYS = ("multipleChoice", "trueFalse", "fillInTheBlank", "identification")


class QuizSynthError(Exception):
    """Base class for generation errors."""


class AIServiceError(QuizSynthError):
    """The completion service failed, timed out, or reported an error."""


class AIResponseInvalid(QuizSynthError):
    """The completion service answered with unusable content."""


def _strip_code_fences(content: str) -> str:
    text = content.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text)
    text = re.sub(r"\s*```$", "", text)
    return text.strip()


def _find_json_objects(text: str) -> list[str]:
    """Find balanced top-level ``{…}`` substrings in *text*."""
    results: list[str] = []
    i = 0
    while i < len(text):
        if text[i] != "{":
            i += 1
            continue
        depth = 0
        in_str = False
        escape = False
        for j in range(i, len(text)):
            ch = text[j]
            if escape:
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                in_str = not in_str
                continue
            if in_str:
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    results.append(text[i : j + 1])
                    i = j + 1
                    break
        else:
            # Unbalanced, skip this opening brace
            i += 1
    return results


def _load_json(content: str):
    """Parse *content* as JSON, tolerating fences and surrounding chatter.

    Strips ``<think>`` blocks (reasoning models may put draft JSON there) and
    code fences first. If the remainder is not valid JSON, the last balanced
    ``{…}`` block that parses is used.
    """
    text = re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)
    text = _strip_code_fences(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        error = e

    for candidate in reversed(_find_json_objects(text)):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise AIResponseInvalid(f"Invalid JSON response from AI: {error}")


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _validate_multiple_choice(item: dict) -> str | None:
    if not _is_text(item.get("question")):
        return "question must be a non-empty string"
    options = item.get("options")
    if not isinstance(options, list) or len(options) != 4:
        n = len(options) if isinstance(options, list) else type(options).__name__
        return f"options must be list of 4 (got {n})"
    if not all(_is_text(o) for o in options):
        return "options must all be non-empty strings"

    # Coerce correctAnswer from string to int (common LLM mistake)
    ci = item.get("correctAnswer")
    if isinstance(ci, str) and ci.strip().isdigit():
        item["correctAnswer"] = ci = int(ci.strip())
    if isinstance(ci, bool) or not isinstance(ci, int):
        return f"correctAnswer not an int (got {type(ci).__name__}: {ci!r})"
    if ci < 0 or ci >= 4:
        return f"correctAnswer out of range: {ci}"
    return None


def _validate_true_false(item: dict) -> str | None:
    if not _is_text(item.get("statement")):
        return "statement must be a non-empty string"
    answer = item.get("answer")
    if isinstance(answer, str) and answer.strip().lower() in ("true", "false"):
        item["answer"] = answer = answer.strip().lower() == "true"
    if not isinstance(answer, bool):
        return f"answer must be a boolean (got {type(answer).__name__}: {answer!r})"
    return None


def _validate_fill_in_the_blank(item: dict) -> str | None:
    if not _is_text(item.get("sentence")):
        return "sentence must be a non-empty string"
    if not _is_text(item.get("answer")):
        return "answer must be a non-empty string"
    return None


def _validate_identification(item: dict) -> str | None:
    if not _is_text(item.get("question")):
        return "question must be a non-empty string"
    if not _is_text(item.get("answer")):
        return "answer must be a non-empty string"
    return None


_VALIDATORS = {
    "multipleChoice": _validate_multiple_choice,
    "trueFalse": _validate_true_false,
    "fillInTheBlank": _validate_fill_in_the_blank,
    "identification": _validate_identification,
}


def validate_question_payload(data) -> str | None:
    """Check the parsed response shape, patching minor issues in place.

    Missing arrays are defaulted to ``[]``. Returns ``None`` on success or a
    human-readable reason on failure.
    """
    if not isinstance(data, dict):
        return f"expected a JSON object, got {type(data).__name__}"
    for key in ARRAY_KEYS:
        items = data.get(key)
        if items is None:
            data[key] = []
            continue
        if not isinstance(items, list):
            return f"{key} must be a list, got {type(items).__name__}"
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                return f"{key}[{i}]: expected object, got {type(item).__name__}"
            reason = _VALIDATORS[key](item)
            if reason:
                return f"{key}[{i}]: {reason}"
    return None


def parse_response(content: str) -> QuestionSet:
    """Turn the model's textual answer into a :class:`QuestionSet`.

    Raises :class:`AIResponseInvalid` on malformed JSON or on elements with
    the wrong shape.
    """
    data = _load_json(content)
    reason = validate_question_payload(data)
    if reason:
        raise AIResponseInvalid(f"AI response failed validation: {reason}")

    return QuestionSet(
        multiple_choice=[
            MultipleChoiceQuestion(
                question=q["question"],
                options=q["options"],
                correct_answer=q["correctAnswer"],
            )
            for q in data["multipleChoice"]
        ],
        true_false=[
            TrueFalseQuestion(statement=q["statement"], answer=q["answer"])
            for q in data["trueFalse"]
        ],
        fill_in_the_blank=[
            FillInTheBlankQuestion(sentence=q["sentence"], answer=q["answer"])
            for q in data["fillInTheBlank"]
        ],
        identification=[
            IdentificationQuestion(question=q["question"], answer=q["answer"])
            for q in data["identification"]
        ],
    )


def _extract_content(response) -> str:
    if not isinstance(response, dict):
        raise AIResponseInvalid(f"Unexpected response type: {type(response).__name__}")
    if response.get("error"):
        raise AIServiceError(f"Completion service error: {response['error']}")
    output = response.get("output")
    content = output.get("content") if isinstance(output, dict) else None
    if not isinstance(content, str) or not content:
        raise AIResponseInvalid("No valid content in AI response")
    return content


class AIGenerationClient:
    """Prompt an :class:`LLMProvider` for a full question set.

    ``timeout`` (seconds) bounds the completion call; ``None`` waits forever.
    """

    def __init__(
        self,
        llm: LLMProvider,
        timeout: float | None = 60.0,
        temperature: float = 0.7,
        excerpt_chars: int = EXCERPT_CHARS,
    ):
        self.llm = llm
        self.timeout = timeout
        self.temperature = temperature
        self.excerpt_chars = excerpt_chars

    def build_prompt(
        self,
        text: str,
        difficulty: str,
        number_of_questions: int,
        question_types: list[str] | None = None,
    ) -> str:
        counts = distribute_questions(number_of_questions, question_types)
        return build_question_prompt(text, difficulty, counts, self.excerpt_chars)

    async def generate(
        self,
        text: str,
        difficulty: str = "moderate",
        number_of_questions: int = 10,
        question_types: list[str] | None = None,
    ) -> QuestionSet:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self.build_prompt(
                text, difficulty, number_of_questions, question_types,
            )},
        ]

        _log.info("Requesting %d questions from %s", number_of_questions, self.llm.name())
        try:
            response = await asyncio.wait_for(
                self.llm.run(messages, temperature=self.temperature),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Completion service timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Completion service call failed: {e}") from e

        content = _extract_content(response)
        _log.debug("Raw response: %.300s", content)
        questions = parse_response(content)
        _log.info("AI response parsed: %d questions", questions.total)
        return questions
