"""
Tests for IterationController

Drives the loop with ScriptedProvider so every model turn is explicit.
"""

import pytest

from weft.agent.controller import IterationController, LoopState
from weft.agent.dispatcher import ToolDispatcher
from weft.agent.log import MessageLog
from weft.errors import (
    IterationExceededError,
    ProviderEmptyResponseError,
    ProviderError,
    SkillNotFoundError,
    ToolInvocationError,
    ToolNotFoundError,
)
from weft.skills import Skill, SkillOrchestrator

ADD_CALL = '{"action":"call_tool","tool":"add","args":{"a":2,"b":3}}'


def _controller(provider, tools=(), max_iterations=10, skills=None):
    log = MessageLog()
    orchestrator = SkillOrchestrator(skills) if skills else None
    return IterationController(
        provider, log, ToolDispatcher(tools), max_iterations, orchestrator=orchestrator
    )


class TestFinalAnswer:
    async def test_plain_answer_in_one_call(self, scripted):
        provider = scripted("4")
        ctl = _controller(provider)

        assert await ctl.run("2 + 2?") == "4"
        assert ctl.iterations == 1
        assert ctl.state is LoopState.DONE
        assert [m.role for m in ctl.log.snapshot()] == ["user", "assistant"]

    async def test_tool_then_answer(self, scripted, add_tool):
        provider = scripted("Let me add. " + ADD_CALL, "The sum is 5.")
        ctl = _controller(provider, [add_tool])

        assert await ctl.run("add 2 and 3") == "The sum is 5."
        contents = [m.content for m in ctl.log.snapshot()]
        assert contents == [
            "add 2 and 3",
            "Let me add. " + ADD_CALL,
            "Tool add returned: 5",
            "The sum is 5.",
        ]
        # second call sees the tool result
        assert provider.calls[1][-1].content == "Tool add returned: 5"


class TestIterationBound:
    async def test_single_iteration_with_tool_call(self, scripted, add_tool):
        provider = scripted(ADD_CALL, "never reached")
        ctl = _controller(provider, [add_tool], max_iterations=1)

        with pytest.raises(IterationExceededError) as exc:
            await ctl.run("add")
        assert exc.value.message == "max iterations (1) exceeded"
        assert len(provider.calls) == 1
        assert len(add_tool.calls) == 1
        assert ctl.iterations == 1
        assert ctl.state is LoopState.FAILED

    async def test_counter_never_exceeds_bound(self, scripted, add_tool):
        provider = scripted(*[ADD_CALL] * 5)
        ctl = _controller(provider, [add_tool], max_iterations=3)

        with pytest.raises(IterationExceededError):
            await ctl.run("loop forever")
        assert ctl.iterations == 3
        assert len(provider.calls) == 3


class TestErrors:
    async def test_empty_response(self, scripted):
        ctl = _controller(scripted(None))
        with pytest.raises(ProviderEmptyResponseError) as exc:
            await ctl.run("hi")
        assert exc.value.message == "no response from LLM"
        assert exc.value.provider == "scripted"

    async def test_provider_failure(self, scripted):
        ctl = _controller(scripted(ConnectionError("reset")))
        with pytest.raises(ProviderError) as exc:
            await ctl.run("hi")
        assert "failed to get LLM response" in exc.value.message
        assert ctl.state is LoopState.FAILED

    async def test_tool_failure_keeps_partial_log(self, scripted, failing_tool):
        call = '{"action":"call_tool","tool":"boom","args":{}}'
        ctl = _controller(scripted(call), [failing_tool])

        with pytest.raises(ToolInvocationError):
            await ctl.run("do it")
        contents = [m.content for m in ctl.log.snapshot()]
        assert contents == ["do it", call]

    async def test_unknown_tool(self, scripted):
        ctl = _controller(scripted('{"action":"call_tool","tool":"ghost","args":{}}'))
        with pytest.raises(ToolNotFoundError):
            await ctl.run("hi")


class TestSkills:
    SKILL = Skill(
        name="Weather",
        description="Look up weather",
        steps=["Call forecast for {{city}}", "Summarize"],
    )

    async def test_use_skill_injects_steps(self, scripted):
        provider = scripted(
            '{"action":"use_skill","skill":"weather","args":{"city":"Oslo"}}',
            "Sunny in Oslo.",
        )
        ctl = _controller(provider, skills=[self.SKILL])

        assert await ctl.run("weather in Oslo?") == "Sunny in Oslo."
        injected = ctl.log.snapshot()[2]
        assert injected.role == "user"
        assert "Executing skill: Weather" in injected.content
        assert "1. Call forecast for Oslo" in injected.content
        assert ctl.iterations == 2

    async def test_unknown_skill(self, scripted):
        provider = scripted('{"action":"use_skill","skill":"cooking","args":{}}')
        ctl = _controller(provider, skills=[self.SKILL])
        with pytest.raises(SkillNotFoundError):
            await ctl.run("cook")
