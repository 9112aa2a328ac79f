"""Configuration loading: vault registry and deletion settings."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from obsidian_properties.constants import CONFIG_ENV_VAR, CONFIG_PATH, DEFAULT_CONFIG_DIR
from obsidian_properties.data_models import ManagerSettings, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)

_SETTING_NAMES = ("confirm_before_delete", "show_modified_files_list", "enable_debug_logging")


def _load_settings(section: Any) -> ManagerSettings:
    """Build a :class:`ManagerSettings` snapshot from the ``settings`` mapping.

    Missing keys keep their defaults. Unknown keys are logged and ignored.

    Raises:
        ValueError: If the section is not a mapping or a value is not a boolean.
    """
    if section is None:
        return ManagerSettings()
    if not isinstance(section, dict):
        raise ValueError("The 'settings' section must be a mapping of option names to booleans")

    values: dict[str, bool] = {}
    for key, value in section.items():
        if key not in _SETTING_NAMES:
            logger.warning("Ignoring unknown setting '%s' in vault configuration", key)
            continue
        if not isinstance(value, bool):
            raise ValueError(f"Setting '{key}' must be true or false")
        values[key] = value
    return ManagerSettings(**values)


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
            at the project root.

    Returns:
        A :class:`VaultConfiguration` with normalized vault metadata, the default
        vault name, and the settings snapshot.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        config_dir = entry.get("config_dir", DEFAULT_CONFIG_DIR)
        if not isinstance(config_dir, str) or not config_dir.strip():
            raise ValueError(f"Vault '{name}' has an invalid 'config_dir'")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=(entry.get("description") or "").strip(),
            exists=resolved_path.is_dir(),
            config_dir=config_dir.strip(),
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    settings = _load_settings(raw_config.get("settings"))
    logger.debug(
        "Loaded %d vault(s) from %s (default=%s)", len(processed), config_path, default_vault
    )
    return VaultConfiguration(default_vault=default_vault, vaults=processed, settings=settings)


def resolve_config_path() -> Path:
    """Return the configuration path, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the configuration once and reuse it for the process lifetime."""
    return load_vault_configuration(resolve_config_path())
