"""Data models for vault configuration, notes, and property indexes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from obsidian_properties.constants import DEFAULT_CONFIG_DIR


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool
    config_dir: str = DEFAULT_CONFIG_DIR

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class ManagerSettings:
    """Immutable snapshot of the user-facing deletion settings.

    Loaded from the ``settings`` section of ``vaults.yaml`` and handed to each
    :class:`~obsidian_properties.core.property_manager.PropertyValueManager`.
    """

    confirm_before_delete: bool = True
    show_modified_files_list: bool = True
    enable_debug_logging: bool = False


class VaultConfiguration:
    """Holds vault metadata, the default vault, and the settings snapshot."""

    def __init__(
        self,
        default_vault: str,
        vaults: dict[str, VaultMetadata],
        settings: ManagerSettings | None = None,
    ) -> None:
        self.default_vault = default_vault
        self.vaults = vaults
        self.settings = settings or ManagerSettings()

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults)) or "none"
            raise ValueError(f"Unknown vault '{name}' (available: {available})") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


@dataclass(frozen=True)
class NoteRef:
    """Handle for a markdown note owned by a document store.

    ``name`` is the vault-relative identifier without the ``.md`` suffix and
    ``path`` the absolute location used for reads and writes.
    """

    name: str
    path: Path

    def __str__(self) -> str:
        return self.name


@dataclass
class PropertyValueIndex:
    """Distinct values of one multitext property and the notes using each.

    Every entry of ``values`` has a matching key in ``files``. An empty note
    list marks the value as orphaned: it is known (from the values cache) but
    no note currently uses it.
    """

    property: str
    values: set[str] = field(default_factory=set)
    files: dict[str, list[NoteRef]] = field(default_factory=dict)

    def add(self, value: str, note: NoteRef | None = None) -> None:
        """Record ``value``, attributing it to ``note`` when one is given."""
        self.values.add(value)
        notes = self.files.setdefault(value, [])
        if note is not None:
            notes.append(note)

    def discard(self, value: str) -> None:
        self.values.discard(value)
        self.files.pop(value, None)

    def sorted_values(self) -> list[str]:
        return sorted(self.values)

    def file_count(self, value: str) -> int:
        return len(self.files.get(value, []))

    def is_orphaned(self, value: str) -> bool:
        return value in self.values and self.file_count(value) == 0

    def as_payload(self, include_files: bool = False) -> dict[str, Any]:
        """Return a serializable payload with values in lexicographic order."""
        entries: list[dict[str, Any]] = []
        for value in self.sorted_values():
            entry: dict[str, Any] = {
                "value": value,
                "file_count": self.file_count(value),
                "orphaned": self.is_orphaned(value),
            }
            if include_files:
                entry["files"] = [note.name for note in self.files.get(value, [])]
            entries.append(entry)
        return {"property": self.property, "values": entries}


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of removing one property value across the vault.

    ``updated_count`` counts written notes only. Notes whose text already lacked
    the value are listed in ``unchanged_files`` and are not counted.
    """

    property: str
    value: str
    targeted_count: int
    updated_count: int
    failed_files: list[str] = field(default_factory=list)
    modified_files: list[str] = field(default_factory=list)
    unchanged_files: list[str] = field(default_factory=list)
    orphaned: bool = False

    def as_payload(self, include_modified_files: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "property": self.property,
            "value": self.value,
            "status": "orphan_removed" if self.orphaned else "deleted",
            "targeted_count": self.targeted_count,
            "updated_count": self.updated_count,
            "failed_files": list(self.failed_files),
            "unchanged_files": list(self.unchanged_files),
        }
        if include_modified_files:
            payload["modified_files"] = list(self.modified_files)
        return payload
