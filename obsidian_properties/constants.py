"""Module-level constants for the Obsidian property manager."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "OBSIDIAN_PROPERTIES_CONFIG"

# Obsidian layout
DEFAULT_CONFIG_DIR = ".obsidian"
TYPES_FILENAME = "types.json"
MULTITEXT_TYPE = "multitext"
FRONTMATTER_DELIMITER = "---"

# Logging
LOG_LEVEL = "INFO"
PACKAGE_LOGGER = "obsidian_properties"
