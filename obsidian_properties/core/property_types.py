"""Property type declarations read from the vault's ``types.json``."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from obsidian_properties.constants import MULTITEXT_TYPE, TYPES_FILENAME
from obsidian_properties.core.vault_store import DocumentStore

logger = logging.getLogger(__name__)


def parse_type_declarations(raw: str) -> dict[str, str]:
    """Parse the raw content of ``types.json`` into a name -> type mapping.

    Obsidian nests declarations under a top-level ``"types"`` object. When that
    key is absent the document itself is treated as the flat mapping. Entries
    whose type tag is not a string are ignored.

    Raises:
        ValueError: If the content is not JSON or does not hold an object.
    """
    data = json.loads(raw)
    if not isinstance(data, Mapping):
        raise ValueError(f"{TYPES_FILENAME} must contain a JSON object")

    declarations = data.get("types", data)
    if not isinstance(declarations, Mapping):
        raise ValueError(f"'types' in {TYPES_FILENAME} must be a JSON object")

    return {
        str(name): type_tag
        for name, type_tag in declarations.items()
        if isinstance(type_tag, str)
    }


class PropertyTypeResolver:
    """Answers whether a property name is declared as ``multitext``."""

    def __init__(self, declared_types: Mapping[str, str] | None = None) -> None:
        self._declared = dict(declared_types or {})
        self._multitext = frozenset(
            name for name, type_tag in self._declared.items() if type_tag == MULTITEXT_TYPE
        )

    @classmethod
    def from_store(cls, store: DocumentStore) -> "PropertyTypeResolver":
        """Load declarations through ``store``.

        A missing or malformed declaration file degrades to a resolver that
        knows no multitext properties; the failure is logged, not raised.
        """
        try:
            raw = store.read_config_file(TYPES_FILENAME)
            declared = parse_type_declarations(raw)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            # json.JSONDecodeError is a ValueError subclass
            logger.warning("Could not read %s: %s", TYPES_FILENAME, exc)
            return cls()

        resolver = cls(declared)
        logger.debug(
            "Loaded %d property declaration(s), multitext: %s",
            len(declared),
            ", ".join(sorted(resolver.multitext_properties)) or "none",
        )
        return resolver

    @property
    def multitext_properties(self) -> frozenset[str]:
        return self._multitext

    def declared_type(self, name: str) -> str | None:
        return self._declared.get(name)

    def is_multitext(self, name: str) -> bool:
        return name in self._multitext
