"""Structured error hierarchy for the agent runtime."""

from __future__ import annotations


class WeftError(Exception):
    def __init__(self, code: str, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    @classmethod
    def wrap(cls, err: Exception) -> WeftError:
        if isinstance(err, WeftError):
            return err
        return WeftError("UNKNOWN", str(err), err)


class ConfigError(WeftError):
    def __init__(self, message: str) -> None:
        super().__init__("CONFIG_ERROR", message)


class ProviderError(WeftError):
    """Model call failed, returned no choices, or the stream broke."""

    def __init__(
        self,
        code: str,
        provider: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
        self.provider = provider


class ProviderEmptyResponseError(ProviderError):
    def __init__(self, provider: str) -> None:
        super().__init__("PROVIDER_EMPTY", provider, "no response from LLM")


class ToolError(WeftError):
    def __init__(
        self, code: str, tool_name: str, message: str, cause: Exception | None = None
    ) -> None:
        super().__init__(code, message, cause)
        self.tool_name = tool_name


class ToolNameMissingError(ToolError):
    def __init__(self) -> None:
        super().__init__(
            "TOOL_NAME_MISSING", "", "tool name is required for call_tool action"
        )


class ToolNotFoundError(ToolError):
    def __init__(self, tool_name: str) -> None:
        super().__init__("TOOL_NOT_FOUND", tool_name, f"tool not found: {tool_name}")


class ToolInvocationError(ToolError):
    def __init__(self, tool_name: str, cause: Exception) -> None:
        super().__init__(
            "TOOL_CALL_FAILED",
            tool_name,
            f"tool call failed for {tool_name}: {cause}",
            cause,
        )


class SkillNotFoundError(WeftError):
    def __init__(self, skill_name: str) -> None:
        super().__init__("SKILL_NOT_FOUND", f"skill not found: {skill_name}")
        self.skill_name = skill_name


class IterationExceededError(WeftError):
    def __init__(self, max_iterations: int) -> None:
        super().__init__(
            "MAX_ITERATIONS", f"max iterations ({max_iterations}) exceeded"
        )
        self.max_iterations = max_iterations


class MemoryStoreError(WeftError):
    """Raised by memory backends. The message log recovers from it locally."""

    def __init__(self, operation: str, message: str, cause: Exception | None = None) -> None:
        super().__init__("MEMORY_ERROR", f"memory {operation} failed: {message}", cause)
        self.operation = operation


class DecodeError(WeftError):
    """Action payload could not be decoded. Never leaves the codec."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__("DECODE_ERROR", message, cause)
