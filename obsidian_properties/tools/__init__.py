"""MCP tool definitions for multitext property management.

Importing this package registers every @mcp.tool() decorated function with
the server.
"""

from obsidian_properties.tools import vault_tools
from obsidian_properties.tools import property_tools

__all__ = [
    "vault_tools",
    "property_tools",
]
