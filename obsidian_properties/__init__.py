"""Obsidian Property Manager MCP Server

Lists the values of multitext frontmatter properties across a vault and
removes a chosen value from every note that uses it.
"""

from obsidian_properties.config import get_vault_configuration, load_vault_configuration
from obsidian_properties.data_models import (
    DeletionResult,
    ManagerSettings,
    NoteRef,
    PropertyValueIndex,
    VaultConfiguration,
    VaultMetadata,
)
from obsidian_properties.core.frontmatter_patch import remove_property_value
from obsidian_properties.core.property_index import build_property_index
from obsidian_properties.core.property_manager import PropertyValueManager
from obsidian_properties.core.property_types import PropertyTypeResolver
from obsidian_properties.core.vault_store import DocumentStore, VaultDocumentStore
from obsidian_properties.session import resolve_vault, set_active_vault, get_active_vault
from obsidian_properties.server import mcp, run_server

# Import tools to register them with the MCP server
from obsidian_properties import tools  # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "get_vault_configuration",
    "load_vault_configuration",
    "DeletionResult",
    "ManagerSettings",
    "NoteRef",
    "PropertyValueIndex",
    "VaultConfiguration",
    "VaultMetadata",
    "remove_property_value",
    "build_property_index",
    "PropertyValueManager",
    "PropertyTypeResolver",
    "DocumentStore",
    "VaultDocumentStore",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
]
