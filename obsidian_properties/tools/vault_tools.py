"""MCP tools for vault selection."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from obsidian_properties.server import mcp
from obsidian_properties.models import ListVaultsInput, SetActiveVaultInput
from obsidian_properties.config import get_vault_configuration
from obsidian_properties.session import (
    set_active_vault as set_active_vault_session,
    get_active_vault,
    get_session_key,
)

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List configured vaults, the default, and this session's active vault.

    Returns:
        {
            "default": str,
            "active": str | None,
            "vaults": [{"name": str, "path": str, "description": str, "exists": bool}]
        }

    Examples:
        - Use when: Starting conversation, need to see available vaults
        - Use when: User mentions vault by name, verify it exists
        - Don't use: Already know vault name and just need to switch
    """
    configuration = get_vault_configuration()
    active = get_active_vault(ctx).name if ctx is not None else None

    payload = configuration.as_payload()
    payload["active"] = active
    return payload


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Select the vault used by property tools that omit ``vault``.

    Returns:
        {"vault": str, "path": str, "status": "active"}

    Examples:
        - Use when: User says "switch to my work vault"
        - Use when: Cleaning up properties across several calls in one vault
        - Don't use: Single operation in another vault (pass vault param directly)

    Error Handling:
        - Unknown vault → ValueError listing the configured vaults
    """
    metadata = set_active_vault_session(ctx, input.vault)
    logger.info("Active vault for session %s set to '%s'", get_session_key(ctx), metadata.name)
    return {
        "vault": metadata.name,
        "path": str(metadata.path),
        "status": "active",
    }
