"""Tool helpers: function tools, schemas and MCP-backed tools."""

from ..types import Tool, ToolSchema
from .function import FunctionTool, define_tool, describe_tool, tool
from .mcp_client import McpClient, McpServerConfig, McpTool, McpToolInfo, initialize_mcp
from .schema import DictSchema, PydanticSchema, schema_from_signature

__all__ = [
    "Tool", "ToolSchema",
    "FunctionTool", "define_tool", "describe_tool", "tool",
    "PydanticSchema", "DictSchema", "schema_from_signature",
    "McpClient", "McpServerConfig", "McpTool", "McpToolInfo", "initialize_mcp",
]
