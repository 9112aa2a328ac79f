"""FastMCP server initialization and logging setup."""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from obsidian_properties.config import get_vault_configuration
from obsidian_properties.constants import LOG_LEVEL, PACKAGE_LOGGER
from obsidian_properties.data_models import ManagerSettings

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("obsidian_properties")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def configure_logging(settings: Optional[ManagerSettings] = None) -> None:
    """Configure root logging; debug output for the package when enabled in settings."""
    logging.basicConfig(level=LOG_LEVEL)
    if settings is not None and settings.enable_debug_logging:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)


def run_server():
    """Start the MCP server with stdio transport."""
    configure_logging(get_vault_configuration().settings)
    logger.info("Starting Obsidian property manager server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
