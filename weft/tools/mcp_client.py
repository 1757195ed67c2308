"""MCP stdio client. Connects to MCP servers via JSON-RPC over stdin/stdout."""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..errors import ConfigError
from .function import describe_tool

logger = logging.getLogger(__name__)

SUPPORTED_TRANSPORTS = ("stdio",)
_KNOWN_TRANSPORTS = ("stdio", "sse", "streamable_http")


@dataclass
class McpServerConfig:
    """One MCP server entry. Only ``stdio`` servers can be launched."""

    name: str
    command: str = ""
    args: list[str] = field(default_factory=list)
    env: dict[str, str] | None = None
    transport: str = "stdio"
    url: str = ""
    description: str = ""
    timeout_sec: float = 30.0
    disabled: bool = False

    def validate(self) -> None:
        if not self.name:
            raise ConfigError("config name is required")
        if not self.transport:
            raise ConfigError("transport type is required")
        if self.transport not in _KNOWN_TRANSPORTS:
            raise ConfigError(f"unsupported transport type: {self.transport}")
        if self.transport not in SUPPORTED_TRANSPORTS:
            raise ConfigError(f"{self.transport} transport is not available, use stdio")
        if not self.command:
            raise ConfigError("command is required for stdio transport")


@dataclass
class McpToolInfo:
    name: str
    description: str = ""
    input_schema: dict[str, Any] | None = None

    @classmethod
    def from_listing(cls, entry: dict[str, Any]) -> McpToolInfo:
        return cls(
            name=entry["name"],
            description=entry.get("description") or "",
            input_schema=entry.get("inputSchema"),
        )


class McpClient:
    """Line-delimited JSON-RPC 2.0 over a child process's stdio."""

    PROTOCOL_VERSION = "2024-11-05"

    def __init__(self, config: McpServerConfig) -> None:
        self.config = config
        self._process: asyncio.subprocess.Process | None = None
        self._reader: asyncio.Task | None = None
        self._inflight: dict[int, asyncio.Future] = {}
        self._ids = itertools.count(1)

    @property
    def connected(self) -> bool:
        return self._process is not None

    async def connect(self) -> None:
        cfg = self.config
        self._process = await asyncio.create_subprocess_exec(
            cfg.command,
            *cfg.args,
            env=cfg.env,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        self._reader = asyncio.create_task(self._dispatch_responses())
        await self.request(
            "initialize",
            {
                "protocolVersion": self.PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "weft", "version": "0.1.0"},
            },
        )
        await self._send({"method": "notifications/initialized"})
        logger.debug("connected to MCP server %s", cfg.name)

    async def list_tools(self) -> list[McpToolInfo]:
        listing = await self.request("tools/list", {})
        return [McpToolInfo.from_listing(t) for t in listing.get("tools", [])]

    async def call_tool(self, name: str, args: dict[str, Any]) -> str:
        result = await self.request("tools/call", {"name": name, "arguments": args})
        parts = result.get("content") or []
        if result.get("isError"):
            detail = parts[0].get("text") if parts else None
            raise RuntimeError(detail or "MCP tool error")
        for part in parts:
            if part.get("type") == "text":
                return part.get("text", "")
            if "data" in part:
                return part["data"]
        return ""

    async def disconnect(self) -> None:
        if self._reader is not None:
            self._reader.cancel()
            self._reader = None
        process, self._process = self._process, None
        if process is not None:
            if process.returncode is None:
                process.kill()
            await process.wait()
        for waiter in self._inflight.values():
            if not waiter.done():
                waiter.set_exception(RuntimeError("MCP client disconnected"))
        self._inflight.clear()

    async def request(self, method: str, params: Any) -> Any:
        if self._reader is None or self._reader.done():
            raise RuntimeError("MCP server closed")
        request_id = next(self._ids)
        # registered before writing so a fast reply can't be missed
        waiter = asyncio.get_running_loop().create_future()
        self._inflight[request_id] = waiter
        try:
            await self._send({"id": request_id, "method": method, "params": params})
            return await asyncio.wait_for(waiter, timeout=self.config.timeout_sec)
        finally:
            self._inflight.pop(request_id, None)

    async def _send(self, message: dict[str, Any]) -> None:
        if self._process is None or self._process.stdin is None:
            raise RuntimeError("MCP client not connected")
        line = json.dumps({"jsonrpc": "2.0", **message}) + "\n"
        try:
            self._process.stdin.write(line.encode())
            await self._process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            raise RuntimeError("MCP server closed") from e

    async def _dispatch_responses(self) -> None:
        stdout = self._process.stdout
        async for raw in stdout:
            try:
                reply = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("ignoring non-JSON line from %s", self.config.name)
                continue
            if not isinstance(reply, dict):
                continue
            waiter = self._inflight.get(reply.get("id"))
            if waiter is None or waiter.done():
                continue
            error = reply.get("error")
            if error:
                waiter.set_exception(RuntimeError(error.get("message", "RPC error")))
            else:
                waiter.set_result(reply.get("result") or {})
        # EOF: the server exited, nothing else will answer
        logger.warning("MCP server %s closed its output", self.config.name)
        for waiter in self._inflight.values():
            if not waiter.done():
                waiter.set_exception(RuntimeError("MCP server closed"))


class McpTool:
    """A ``Tool`` served by a connected MCP server."""

    def __init__(self, client: McpClient, info: McpToolInfo) -> None:
        self._client = client
        self._info = info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def description(self) -> str:
        schema = self._info.input_schema or {"type": "object", "properties": {}}
        return describe_tool(self._info.name, self._info.description, schema)

    async def call(self, args: dict[str, Any]) -> str:
        return await self._client.call_tool(self._info.name, args if isinstance(args, dict) else {})


async def initialize_mcp(
    configs: Sequence[McpServerConfig],
) -> tuple[list[McpTool], list[McpClient]]:
    """Connect every enabled server and collect its tools.

    Returns the tools and the live clients; callers disconnect the clients
    when done.
    """
    tools: list[McpTool] = []
    clients: list[McpClient] = []
    for cfg in configs:
        if cfg.disabled:
            logger.info("skipping disabled MCP server %s", cfg.name)
            continue
        cfg.validate()
        client = McpClient(cfg)
        try:
            await client.connect()
            infos = await client.list_tools()
        except Exception:
            await client.disconnect()
            for c in clients:
                await c.disconnect()
            raise
        clients.append(client)
        tools.extend(McpTool(client, info) for info in infos)
        logger.info("MCP server %s provided %d tools", cfg.name, len(infos))
    return tools, clients
