"""Configuration exports."""

from .models import AgentConfig, ModelConfig

__all__ = ["AgentConfig", "ModelConfig"]
