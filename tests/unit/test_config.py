"""
Tests for configuration models
"""

import pytest
from pydantic import ValidationError

from weft.config import AgentConfig, ModelConfig


class TestModelConfig:
    def test_defaults(self):
        config = ModelConfig(model="gpt-4o-mini")
        assert config.temperature == 0.7
        assert config.base_url is None
        assert config.max_tokens is None

    def test_model_is_required(self):
        with pytest.raises(ValidationError):
            ModelConfig()

    def test_temperature_bounds(self):
        with pytest.raises(ValidationError):
            ModelConfig(model="m", temperature=3.0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WEFT_MODEL", "deepseek-chat")
        monkeypatch.setenv("WEFT_API_KEY", "secret")
        monkeypatch.setenv("WEFT_BASE_URL", "https://api.deepseek.com/v1")

        config = ModelConfig.from_env(temperature=0.1)

        assert config.model == "deepseek-chat"
        assert config.api_key == "secret"
        assert config.base_url == "https://api.deepseek.com/v1"
        assert config.temperature == 0.1

    def test_from_env_defaults(self, monkeypatch):
        for name in ("WEFT_MODEL", "WEFT_API_KEY", "WEFT_BASE_URL"):
            monkeypatch.delenv(name, raising=False)
        config = ModelConfig.from_env()
        assert config.model == "gpt-4o-mini"
        assert config.base_url is None


class TestAgentConfig:
    def test_defaults(self):
        config = AgentConfig()
        assert config.max_iterations == 10
        assert config.stream_buffer_size == 10
        assert config.debug is False
        assert config.conversation_id is None

    def test_max_iterations_must_be_positive(self):
        with pytest.raises(ValidationError):
            AgentConfig(max_iterations=0)
