"""Session state: active vault selection and per-vault property managers."""

from typing import Dict, Optional

from mcp.server.fastmcp import Context

from obsidian_properties.config import get_vault_configuration
from obsidian_properties.core.property_manager import PropertyValueManager
from obsidian_properties.core.vault_operations import ensure_vault_ready
from obsidian_properties.core.vault_store import VaultDocumentStore
from obsidian_properties.data_models import VaultMetadata

# Session state storage
_ACTIVE_VAULTS: Dict[int, str] = {}
_MANAGERS: Dict[str, PropertyValueManager] = {}


def get_session_key(ctx: Context) -> int:
    """Produce a stable per-session key (identity of the MCP session object)."""
    return id(ctx.session)


def set_active_vault(ctx: Context, vault_name: str) -> VaultMetadata:
    """Set the active vault for a client session.

    Raises:
        ValueError: If ``vault_name`` is not present in the configuration.
    """
    metadata = get_vault_configuration().get(vault_name)
    _ACTIVE_VAULTS[get_session_key(ctx)] = metadata.name
    return metadata


def get_active_vault(ctx: Context) -> VaultMetadata:
    """Retrieve the session's active vault, falling back to the configured default."""
    configuration = get_vault_configuration()
    vault_name = _ACTIVE_VAULTS.get(get_session_key(ctx), configuration.default_vault)
    return configuration.get(vault_name)


def resolve_vault(vault: Optional[str], ctx: Optional[Context] = None) -> VaultMetadata:
    """Resolve which vault an operation targets.

    An explicit ``vault`` wins, then the session's active vault, then the default.

    Raises:
        ValueError: If the supplied ``vault`` name is not recognized.
    """
    configuration = get_vault_configuration()
    if vault:
        return configuration.get(vault)

    if ctx is not None:
        return get_active_vault(ctx)

    return configuration.get(configuration.default_vault)


def get_property_manager(vault: VaultMetadata) -> PropertyValueManager:
    """Return the property manager owning ``vault``'s index, creating it on first use.

    One manager exists per vault so that a deletion batch and the following
    rescan always act on the same index.

    Raises:
        FileNotFoundError: If the vault directory is not accessible.
    """
    ensure_vault_ready(vault)
    manager = _MANAGERS.get(vault.name)
    if manager is None:
        manager = PropertyValueManager(
            VaultDocumentStore(vault),
            settings=get_vault_configuration().settings,
        )
        _MANAGERS[vault.name] = manager
    return manager


def reset_property_managers() -> None:
    """Drop every cached manager (their indexes and known-values caches)."""
    _MANAGERS.clear()
