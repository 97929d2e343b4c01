"""MCP protocol layer."""

from .server import RegistryMCPServer
from .tools import TOOL_DEFINITIONS

__all__ = ["RegistryMCPServer", "TOOL_DEFINITIONS"]
