"""Scan and delete multitext property values across a vault."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from obsidian_properties.core.frontmatter_patch import remove_property_value
from obsidian_properties.core.property_index import build_property_index
from obsidian_properties.core.property_types import PropertyTypeResolver
from obsidian_properties.core.vault_store import DocumentStore
from obsidian_properties.data_models import DeletionResult, ManagerSettings, PropertyValueIndex

logger = logging.getLogger(__name__)


class PropertyValueManager:
    """Owns the property index for one vault and applies deletions to it.

    The index is never patched incrementally after a batch: it is thrown away
    and rebuilt from the notes and declarations on disk.

    Args:
        store: Document store for the vault.
        settings: Settings snapshot; only read, never mutated.
        known_values: Optional cache of known values per property. Values in
            it that no note uses are reported as orphaned.
    """

    def __init__(
        self,
        store: DocumentStore,
        settings: Optional[ManagerSettings] = None,
        known_values: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> None:
        self.store = store
        self.settings = settings or ManagerSettings()
        self._known_values: dict[str, set[str]] = {
            name: set(values) for name, values in (known_values or {}).items()
        }
        self._resolver: Optional[PropertyTypeResolver] = None
        self._index: Optional[dict[str, PropertyValueIndex]] = None

    @property
    def known_values(self) -> dict[str, set[str]]:
        return {name: set(values) for name, values in self._known_values.items()}

    @property
    def index(self) -> dict[str, PropertyValueIndex]:
        if self._index is None:
            return self.scan()
        return self._index

    def scan(self) -> dict[str, PropertyValueIndex]:
        """Rebuild the type declarations and the value index from scratch."""
        self._resolver = PropertyTypeResolver.from_store(self.store)
        self._index = build_property_index(self.store, self._resolver, self._known_values)
        return self._index

    def get_property(self, property_name: str) -> PropertyValueIndex:
        """Return the index entry for ``property_name``.

        Raises:
            ValueError: If the property is not an indexed multitext property.
        """
        try:
            return self.index[property_name]
        except KeyError as exc:
            raise ValueError(
                f"Property '{property_name}' is not a multitext property in use."
            ) from exc

    def preview_deletion(self, property_name: str, value: str) -> dict[str, Any]:
        """Describe what deleting ``value`` would do, without touching any note."""
        entry = self._require_value(property_name, value)
        file_count = entry.file_count(value)
        if file_count == 0:
            message = (
                f'Remove orphaned value "{value}" from the "{property_name}" property? '
                "It is not used in any note; removing it cleans up value suggestions."
            )
        else:
            message = (
                f'Remove "{value}" from the "{property_name}" property in '
                f"{file_count} note(s)? This cannot be undone."
            )
        return {
            "property": property_name,
            "value": value,
            "file_count": file_count,
            "orphaned": file_count == 0,
            "message": message,
        }

    def delete_value(self, property_name: str, value: str) -> DeletionResult:
        """Remove ``value`` from every note that uses it, then rescan.

        Notes are processed one after another in index order. A read or write
        failure on one note is logged and recorded; the rest of the batch still
        runs. Orphaned values are dropped from the index and the known-values
        cache without any note I/O.

        Raises:
            ValueError: If the property or value is not in the index.
        """
        entry = self._require_value(property_name, value)
        # A note listed twice (repeated value) is patched once.
        notes = list(dict.fromkeys(entry.files.get(value, [])))

        if not notes:
            entry.discard(value)
            self._forget_known_value(property_name, value)
            logger.info("Removed orphaned value '%s' from property '%s'", value, property_name)
            return DeletionResult(
                property=property_name,
                value=value,
                targeted_count=0,
                updated_count=0,
                orphaned=True,
            )

        logger.info(
            "Removing '%s' from property '%s' in %d note(s)", value, property_name, len(notes)
        )
        modified: list[str] = []
        failed: list[str] = []
        unchanged: list[str] = []

        for note in notes:
            try:
                original = self.store.read_text(note)
                patched = remove_property_value(original, property_name, value)
                if patched == original:
                    logger.debug("Note '%s' has no matching frontmatter entry", note)
                    unchanged.append(note.name)
                    continue
                self.store.write_text(note, patched)
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Error updating note '%s': %s", note, exc)
                failed.append(note.name)
                continue

            logger.debug("Removed '%s' from '%s' in note '%s'", value, property_name, note)
            modified.append(note.name)

        self._forget_known_value(property_name, value)
        self._index = None
        self.scan()

        logger.info(
            "Removed '%s' from %d of %d note(s) (%d failed)",
            value,
            len(modified),
            len(notes),
            len(failed),
        )
        return DeletionResult(
            property=property_name,
            value=value,
            targeted_count=len(notes),
            updated_count=len(modified),
            failed_files=failed,
            modified_files=modified,
            unchanged_files=unchanged,
        )

    def _require_value(self, property_name: str, value: str) -> PropertyValueIndex:
        entry = self.get_property(property_name)
        if value not in entry.values:
            raise ValueError(f"Value '{value}' is not used by property '{property_name}'.")
        return entry

    def _forget_known_value(self, property_name: str, value: str) -> None:
        cached = self._known_values.get(property_name)
        if cached is None:
            return
        cached.discard(value)
        if not cached:
            del self._known_values[property_name]
