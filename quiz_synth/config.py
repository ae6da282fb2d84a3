from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "ollama",
    "llm_model": "qwen3:8b",
    "ollama_url": "http://localhost:11434",
    "llm_temperature": 0.7,
    "ai_timeout": 60.0,
    "excerpt_chars": 3000,
    "default_difficulty": "moderate",
    "default_question_count": 10,
    "min_text_length": 50,
    "max_text_length": 10000,
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]  # ollama | openai | anthropic | none
    llm_model: str = DEFAULTS["llm_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    llm_temperature: float = DEFAULTS["llm_temperature"]
    ai_timeout: float = DEFAULTS["ai_timeout"]
    excerpt_chars: int = DEFAULTS["excerpt_chars"]
    default_difficulty: str = DEFAULTS["default_difficulty"]
    default_question_count: int = DEFAULTS["default_question_count"]
    min_text_length: int = DEFAULTS["min_text_length"]
    max_text_length: int = DEFAULTS["max_text_length"]

    @property
    def ai_enabled(self) -> bool:
        return self.llm_provider != "none"

    def to_dict(self) -> dict:
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "ollama_url": self.ollama_url,
            "llm_temperature": self.llm_temperature,
            "ai_timeout": self.ai_timeout,
            "excerpt_chars": self.excerpt_chars,
            "default_difficulty": self.default_difficulty,
            "default_question_count": self.default_question_count,
            "min_text_length": self.min_text_length,
            "max_text_length": self.max_text_length,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
