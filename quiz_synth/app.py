"""FastAPI application exposing question generation."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from quiz_synth.ai_client import AIGenerationClient
from quiz_synth.config import Settings, load_settings, save_settings
from quiz_synth.models import DIFFICULTIES, GenerationRequest
from quiz_synth.orchestrator import GenerationOrchestrator
from quiz_synth.providers.base import LLMProvider

_log = logging.getLogger("quiz_synth.app")

app = FastAPI(title="Quiz Synth")

# Global state (initialized in startup)
_settings: Settings | None = None


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def create_llm(s: Settings) -> LLMProvider | None:
    if not s.ai_enabled:
        return None
    if s.llm_provider == "ollama":
        from quiz_synth.providers.llm_ollama import OllamaProvider
        return OllamaProvider(base_url=s.ollama_url, model=s.llm_model)
    elif s.llm_provider == "anthropic":
        from quiz_synth.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider(model=s.llm_model)
    elif s.llm_provider == "openai":
        from quiz_synth.providers.llm_openai import OpenAIProvider
        return OpenAIProvider(model=s.llm_model)
    raise ValueError(f"Unknown LLM provider: {s.llm_provider}")


def build_orchestrator(s: Settings, llm: LLMProvider | None) -> GenerationOrchestrator:
    client = None
    if llm is not None:
        client = AIGenerationClient(
            llm,
            timeout=s.ai_timeout,
            temperature=s.llm_temperature,
            excerpt_chars=s.excerpt_chars,
        )
    return GenerationOrchestrator(client)


def _get_llm() -> LLMProvider | None:
    return create_llm(get_settings())


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()


# ── API: Generate questions ───────────────────────────────────────────────

def _parse_generation_request(body: dict, s: Settings) -> GenerationRequest:
    text = body.get("text")
    if not text or not isinstance(text, str):
        raise HTTPException(400, "Text content is required")
    if len(text) < s.min_text_length:
        raise HTTPException(
            400,
            f"Text must be at least {s.min_text_length} characters long for meaningful analysis",
        )
    if len(text) > s.max_text_length:
        raise HTTPException(
            400,
            f"Text is too long. Please limit to {s.max_text_length:,} characters.",
        )

    difficulty = body.get("difficulty") or s.default_difficulty
    if difficulty not in DIFFICULTIES:
        raise HTTPException(400, f"difficulty must be one of: {', '.join(DIFFICULTIES)}")

    count = body.get("numberOfQuestions", s.default_question_count)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise HTTPException(400, "numberOfQuestions must be a positive integer")

    question_types = body.get("questionTypes")
    if question_types is not None and (
        not isinstance(question_types, list)
        or not all(isinstance(t, str) for t in question_types)
    ):
        raise HTTPException(400, "questionTypes must be a list of strings")

    return GenerationRequest(
        text=text,
        difficulty=difficulty,
        number_of_questions=count,
        question_types=question_types,
    )


@app.post("/api/generate")
async def api_generate(request: Request):
    try:
        body = await request.json() if await request.body() else {}
    except ValueError:
        raise HTTPException(400, "Request body must be valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")

    s = get_settings()
    gen_request = _parse_generation_request(body, s)
    try:
        llm = _get_llm()
    except ValueError as e:
        _log.warning("Cannot build LLM provider, using rule-based only: %s", e)
        llm = None
    orchestrator = build_orchestrator(s, llm)
    result = await orchestrator.generate(gen_request)

    return {
        "success": True,
        "questions": result.questions.to_dict(),
        "method": result.method,
        "metadata": {
            "textLength": len(gen_request.text),
            "wordCount": len(gen_request.text.split()),
            "questionCount": result.questions.total,
            "generatedAt": datetime.now(timezone.utc).isoformat(),
        },
    }


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
