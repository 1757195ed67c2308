"""
Tests for MCP configuration and tool wrapping
"""

import asyncio
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

from weft.errors import ConfigError
from weft.tools import McpClient, McpServerConfig, McpTool, McpToolInfo, initialize_mcp


class TestMcpServerConfig:
    def test_valid_stdio(self):
        McpServerConfig(name="fs", command="mcp-fs").validate()

    def test_name_required(self):
        with pytest.raises(ConfigError, match="name is required"):
            McpServerConfig(name="", command="x").validate()

    def test_command_required(self):
        with pytest.raises(ConfigError, match="command is required"):
            McpServerConfig(name="fs").validate()

    def test_unknown_transport(self):
        with pytest.raises(ConfigError, match="unsupported transport"):
            McpServerConfig(name="fs", command="x", transport="carrier-pigeon").validate()

    def test_http_transports_unavailable(self):
        with pytest.raises(ConfigError, match="not available"):
            McpServerConfig(name="fs", transport="sse", url="http://x").validate()


class TestMcpTool:
    async def test_delegates_to_client(self):
        client = MagicMock()
        client.call_tool = AsyncMock(return_value="file contents")
        info = McpToolInfo(
            name="read_file",
            description="Read a file",
            input_schema={"type": "object", "properties": {"path": {"type": "string"}}},
        )
        t = McpTool(client, info)

        assert t.name == "read_file"
        assert t.description.startswith("\nname: read_file, desc: Read a file, args_schema: ")
        assert await t.call({"path": "/tmp/x"}) == "file contents"
        client.call_tool.assert_awaited_once_with("read_file", {"path": "/tmp/x"})


class TestInitializeMcp:
    async def test_disabled_servers_are_skipped(self):
        tools, clients = await initialize_mcp([McpServerConfig(name="off", disabled=True)])
        assert tools == [] and clients == []

    async def test_invalid_config_raises(self):
        with pytest.raises(ConfigError):
            await initialize_mcp([McpServerConfig(name="bad")])


class TestMcpClient:
    async def test_server_exit_fails_pending_request(self):
        """A server that exits without replying fails the call instead of waiting out the timeout."""
        config = McpServerConfig(
            name="dead",
            command=sys.executable,
            args=["-c", "import sys; sys.stdin.readline()"],
            timeout_sec=30,
        )
        client = McpClient(config)
        try:
            with pytest.raises(RuntimeError, match="MCP server closed"):
                await asyncio.wait_for(client.connect(), timeout=5)
            # later calls fail fast as well
            with pytest.raises(RuntimeError, match="MCP server closed"):
                await client.request("tools/list", {})
        finally:
            await client.disconnect()
