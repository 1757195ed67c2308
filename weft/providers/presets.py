"""Provider presets: OpenAI-compatible factories."""

from __future__ import annotations

from ..config import ModelConfig
from .openai import OpenAIProvider


def create_openai(api_key: str, model: str = "gpt-4o-mini", **kw) -> OpenAIProvider:
    return OpenAIProvider(ModelConfig(api_key=api_key, model=model, **kw))


def create_deepseek(api_key: str, model: str = "deepseek-chat", **kw) -> OpenAIProvider:
    return OpenAIProvider(
        ModelConfig(api_key=api_key, model=model, base_url="https://api.deepseek.com/v1", **kw)
    )


def create_qwen(api_key: str, model: str = "qwen-plus", **kw) -> OpenAIProvider:
    return OpenAIProvider(
        ModelConfig(
            api_key=api_key,
            model=model,
            base_url="https://dashscope.aliyuncs.com/compatible-mode/v1",
            **kw,
        )
    )


def create_moonshot(api_key: str, model: str = "moonshot-v1-8k", **kw) -> OpenAIProvider:
    return OpenAIProvider(
        ModelConfig(api_key=api_key, model=model, base_url="https://api.moonshot.cn/v1", **kw)
    )


# --- Local / self-hosted (OpenAI-compatible) ---


def create_ollama(
    model: str = "llama3", base_url: str = "http://localhost:11434/v1", **kw
) -> OpenAIProvider:
    return OpenAIProvider(ModelConfig(api_key="ollama", model=model, base_url=base_url, **kw))


def create_vllm(
    model: str = "default", base_url: str = "http://localhost:8000/v1", **kw
) -> OpenAIProvider:
    return OpenAIProvider(ModelConfig(api_key="vllm", model=model, base_url=base_url, **kw))


def create_custom(api_key: str, model: str, base_url: str, **kw) -> OpenAIProvider:
    return OpenAIProvider(ModelConfig(api_key=api_key, model=model, base_url=base_url, **kw))
