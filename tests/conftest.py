"""
Pytest Configuration and Fixtures
"""

import pytest

from weft.errors import MemoryStoreError
from weft.memory import BufferMemory
from weft.providers import ScriptedProvider
from weft.tools import define_tool


class _WordEncoder:
    def encode(self, text, **kwargs):
        return text.split()


@pytest.fixture(autouse=True)
def offline_tokenizer(monkeypatch):
    """Keep tests offline: tiktoken downloads its encodings on first use."""
    monkeypatch.setattr("weft.agent.usage.tiktoken.get_encoding", lambda name: _WordEncoder())


class FailingMemory(BufferMemory):
    """Buffer memory whose operations can be made to fail."""

    def __init__(self, fail_save=False, fail_load=False, fail_clear=False):
        super().__init__()
        self.fail_save = fail_save
        self.fail_load = fail_load
        self.fail_clear = fail_clear

    async def save_messages(self, conversation_id, messages):
        if self.fail_save:
            raise MemoryStoreError("save", "store offline")
        await super().save_messages(conversation_id, messages)

    async def load_messages(self, conversation_id):
        if self.fail_load:
            raise MemoryStoreError("load", "store offline")
        return await super().load_messages(conversation_id)

    async def clear_messages(self, conversation_id):
        if self.fail_clear:
            raise MemoryStoreError("clear", "store offline")
        await super().clear_messages(conversation_id)


@pytest.fixture
def add_tool():
    """An ``add`` tool over a raw JSON schema."""
    calls = []

    def _add(args):
        calls.append(args)
        return str(args.get("a", 0) + args.get("b", 0))

    tool = define_tool(
        "add",
        "Add two integers",
        {
            "type": "object",
            "properties": {"a": {"type": "integer"}, "b": {"type": "integer"}},
        },
        _add,
    )
    tool.calls = calls
    return tool


@pytest.fixture
def failing_tool():
    def _boom(args):
        raise RuntimeError("disk full")

    return define_tool("boom", "Always fails", {"type": "object", "properties": {}}, _boom)


@pytest.fixture
def scripted():
    """Factory for ScriptedProvider."""

    def _make(*responses, **kwargs):
        return ScriptedProvider(list(responses), **kwargs)

    return _make


@pytest.fixture
def failing_memory():
    """Factory for a memory store with selectable failures."""
    return FailingMemory
