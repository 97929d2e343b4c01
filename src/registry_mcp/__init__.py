"""Registry MCP: npm, JSR and Deno package tools over the Model Context Protocol."""

__version__ = "0.1.0"
