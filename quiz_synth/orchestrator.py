"""Try LLM generation first, fall back to rule-based synthesis on any failure."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from quiz_synth.ai_client import AIGenerationClient
from quiz_synth.models import (
    METHOD_AI,
    METHOD_RULE_BASED,
    GenerationRequest,
    GenerationResult,
    QuestionSet,
)
from quiz_synth.rule_based import RuleBasedGenerator

_log = logging.getLogger("quiz_synth.orchestrator")


@dataclass
class Success:
    questions: QuestionSet


@dataclass
class Failure:
    reason: str
    error: Exception | None = None


class GenerationOrchestrator:
    """Produce a :class:`GenerationResult` for every request.

    The AI attempt yields a :class:`Success` or :class:`Failure`; a failure
    runs the rule-based generator with the same parameters. Nothing raised on
    the AI path reaches the caller.
    """

    def __init__(
        self,
        ai_client: AIGenerationClient | None,
        rule_generator: RuleBasedGenerator | None = None,
    ):
        self.ai_client = ai_client
        self.rule_generator = rule_generator or RuleBasedGenerator()

    async def attempt_ai(self, request: GenerationRequest) -> Success | Failure:
        if self.ai_client is None:
            return Failure("AI generation is not configured")
        try:
            questions = await self.ai_client.generate(
                request.text,
                request.difficulty,
                request.number_of_questions,
                request.question_types,
            )
        except Exception as e:
            return Failure(f"{type(e).__name__}: {e}", error=e)
        return Success(questions)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        outcome = await self.attempt_ai(request)
        if isinstance(outcome, Success):
            _log.info("Questions generated with AI (%d)", outcome.questions.total)
            return GenerationResult(questions=outcome.questions, method=METHOD_AI)

        _log.warning("AI generation failed, using rule-based fallback: %s", outcome.reason)
        questions = self.rule_generator.generate(
            request.text,
            request.difficulty,
            request.number_of_questions,
            request.question_types,
        )
        _log.info("Questions generated with rule-based method (%d)", questions.total)
        return GenerationResult(
            questions=questions,
            method=METHOD_RULE_BASED,
            fallback_reason=outcome.reason,
        )
