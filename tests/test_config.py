"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

from quiz_synth.config import DEFAULTS, Settings, load_settings, save_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.llm_provider == "ollama"
        assert s.ai_timeout == 60.0
        assert s.excerpt_chars == 3000
        assert s.min_text_length == 50
        assert s.max_text_length == 10000

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d == DEFAULTS
        assert len(d) == 10  # all fields present

    def test_to_dict_roundtrip(self):
        s = Settings(llm_provider="anthropic", default_question_count=20)
        s2 = Settings(**s.to_dict())
        assert s2.llm_provider == "anthropic"
        assert s2.default_question_count == 20

    def test_ai_enabled(self):
        assert Settings().ai_enabled
        assert not Settings(llm_provider="none").ai_enabled


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config = {"llm_provider": "openai", "ai_timeout": 5}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("quiz_synth.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.llm_provider == "openai"
        assert s.ai_timeout == 5
        # Defaults for unspecified fields
        assert s.default_difficulty == "moderate"

    def test_load_missing_file(self, tmp_path):
        config_path = tmp_path / "nonexistent.json"
        with patch("quiz_synth.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.llm_provider == "ollama"  # all defaults

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("quiz_synth.config.CONFIG_PATH", config_path):
            save_settings(Settings(llm_provider="none"))

        data = json.loads(config_path.read_text())
        assert data["llm_provider"] == "none"

    def test_unknown_keys_ignored(self, tmp_path):
        config = {"llm_provider": "ollama", "tts_voice": "whatever"}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("quiz_synth.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.llm_provider == "ollama"
        assert not hasattr(s, "tts_voice")
