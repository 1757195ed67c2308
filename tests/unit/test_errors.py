"""
Tests for the error hierarchy
"""

from weft.errors import (
    IterationExceededError,
    MemoryStoreError,
    ProviderEmptyResponseError,
    ProviderError,
    SkillNotFoundError,
    ToolError,
    ToolInvocationError,
    ToolNameMissingError,
    ToolNotFoundError,
    WeftError,
)


class TestWeftError:
    def test_wrap_passes_through(self):
        err = ToolNotFoundError("x")
        assert WeftError.wrap(err) is err

    def test_wrap_foreign(self):
        cause = ValueError("bad")
        wrapped = WeftError.wrap(cause)
        assert wrapped.code == "UNKNOWN"
        assert wrapped.cause is cause
        assert str(wrapped) == "bad"


class TestTaxonomy:
    def test_tool_errors(self):
        for err in (ToolNameMissingError(), ToolNotFoundError("t"), ToolInvocationError("t", OSError())):
            assert isinstance(err, ToolError)
            assert isinstance(err, WeftError)

    def test_messages(self):
        assert str(ToolNameMissingError()) == "tool name is required for call_tool action"
        assert str(IterationExceededError(3)) == "max iterations (3) exceeded"
        assert str(MemoryStoreError("save", "offline")) == "memory save failed: offline"
        assert SkillNotFoundError("cook").skill_name == "cook"

    def test_empty_response_is_provider_error(self):
        err = ProviderEmptyResponseError("openai")
        assert isinstance(err, ProviderError)
        assert err.code == "PROVIDER_EMPTY"
        assert err.provider == "openai"
