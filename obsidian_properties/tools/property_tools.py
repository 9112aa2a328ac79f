"""Multitext property management MCP tools.

This module provides MCP tool wrappers for:
- Listing multitext properties and their values
- Deleting a value from every note that uses it
- Removing orphaned values from the known-values cache
- Rescanning the vault

All tools delegate to the per-vault PropertyValueManager from
obsidian_properties.session.
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_properties.server import mcp
from obsidian_properties.session import get_property_manager, resolve_vault
from obsidian_properties.models import (
    DeletePropertyValueInput,
    ListPropertiesInput,
    ListPropertyValuesInput,
    RescanPropertiesInput,
)

logger = logging.getLogger(__name__)


def _properties_payload(vault_name: str, index: dict[str, Any]) -> dict[str, Any]:
    return {
        "vault": vault_name,
        "properties": [
            {"name": name, "value_count": len(entry.values)}
            for name, entry in index.items()
        ],
    }


# ==============================================================================
# PROPERTY TOOLS
# ==============================================================================

@mcp.tool()
async def list_multitext_properties(
    input: ListPropertiesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List multitext properties used in the vault.

    Only properties declared as ``multitext`` in the vault's types.json are
    reported. Uses the cached index; call rescan_properties() after editing
    notes outside this server.

    Args:
        input (ListPropertiesInput): Validated input containing:
            - vault (str, optional): Target vault (omit to use active vault)

    Returns:
        {
            "vault": str,
            "properties": [{"name": str, "value_count": int}, ...]  # sorted by name
        }

    Examples:
        - Use when: User asks which tag-like properties the vault uses
        - Follow-up: Call list_property_values() for one property
        - Don't use: Notes were just edited outside this server (use rescan_properties())

    Error Handling:
        - Unknown vault → ValueError
        - Vault directory missing → FileNotFoundError
        - Missing or malformed types.json → empty "properties" (logged)
    """
    vault = resolve_vault(input.vault, ctx)
    manager = get_property_manager(vault)
    return _properties_payload(vault.name, manager.index)


@mcp.tool()
async def list_property_values(
    input: ListPropertyValuesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List the distinct values of one multitext property.

    Args:
        input (ListPropertyValuesInput): Validated input containing:
            - property (str): Property name
            - include_files (bool): Include the notes using each value
            - vault (str, optional): Target vault (omit to use active vault)

    Returns:
        {
            "vault": str,
            "property": str,
            "values": [
                {"value": str, "file_count": int, "orphaned": bool, "files": [str]?},
                ...
            ]  # sorted by value
        }

    Examples:
        - Use when: User wants to see every tag in the vault and how often each is used
        - Use when: Finding orphaned or misspelled values before cleaning up
        - Don't use: Reading one note's properties (use the note's frontmatter directly)

    Error Handling:
        - Property not in use or not multitext → ValueError
    """
    vault = resolve_vault(input.vault, ctx)
    manager = get_property_manager(vault)
    entry = manager.get_property(input.property)
    payload = entry.as_payload(include_files=input.include_files)
    payload["vault"] = vault.name
    return payload


@mcp.tool()
async def delete_property_value(
    input: DeletePropertyValueInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Remove a value from a multitext property in every note (destructive).

    The property line is removed from a note's frontmatter when its last value
    goes. All other frontmatter lines and the note body are left untouched.
    Orphaned values (used by no note) are only dropped from the index.

    When confirmation is enabled in settings and ``confirm`` is False, nothing
    is changed and a preview is returned instead.

    Args:
        input (DeletePropertyValueInput): Validated input containing:
            - property (str): Property name
            - value (str): Value to remove
            - confirm (bool): Required True when confirmation is enabled
            - vault (str, optional): Target vault (omit to use active vault)

    Returns:
        Preview:
            {"status": "confirmation_required", "file_count": int, "orphaned": bool,
             "message": str, ...}
        Result:
            {"status": "deleted" | "orphan_removed", "targeted_count": int,
             "updated_count": int, "failed_files": [str], "unchanged_files": [str],
             "modified_files": [str]?}

        ``updated_count`` counts notes actually written. Notes whose frontmatter no
        longer held the value are listed in ``unchanged_files`` and excluded
        from ``updated_count``.

    Examples:
        - Use when: User says "remove the draft tag from all notes"
        - Follow-up: Repeat with ``confirm=True`` after the user approves the preview
        - Don't use: Renaming a value (this only deletes it)

    Error Handling:
        - Unknown property or value → ValueError
        - Per-note read/write failures → listed in "failed_files", batch continues
    """
    vault = resolve_vault(input.vault, ctx)
    manager = get_property_manager(vault)

    if manager.settings.confirm_before_delete and not input.confirm:
        preview = manager.preview_deletion(input.property, input.value)
        preview.update({"vault": vault.name, "status": "confirmation_required"})
        return preview

    result = manager.delete_value(input.property, input.value)
    logger.info(
        "Deleted value '%s' of property '%s' in vault '%s' (%d/%d notes updated)",
        result.value,
        result.property,
        vault.name,
        result.updated_count,
        result.targeted_count,
    )
    payload = result.as_payload(
        include_modified_files=manager.settings.show_modified_files_list
    )
    payload["vault"] = vault.name
    return payload


@mcp.tool()
async def rescan_properties(
    input: RescanPropertiesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Rebuild the property index from the notes and types.json on disk.

    Args:
        input (RescanPropertiesInput): Validated input containing:
            - vault (str, optional): Target vault (omit to use active vault)

    Returns:
        Same shape as list_multitext_properties().

    Examples:
        - Use when: Notes or types.json changed outside this server
        - Don't use: Right after delete_property_value() (it rescans already)
    """
    vault = resolve_vault(input.vault, ctx)
    manager = get_property_manager(vault)
    return _properties_payload(vault.name, manager.scan())
