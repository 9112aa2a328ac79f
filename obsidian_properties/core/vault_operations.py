"""Vault path helpers shared by the document store and tools."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from obsidian_properties.data_models import VaultMetadata


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def note_display_name(vault: VaultMetadata, path: Path) -> str:
    """Convert a note path into a normalized display name without extension.

    Args:
        vault: Vault metadata.
        path: Absolute path to the note within the vault.

    Returns:
        A forward-slash separated string suitable for display, e.g.
        ``"Projects/Alpha"`` for ``<vault>/Projects/Alpha.md``.
    """
    relative = path.relative_to(vault.path)
    return relative.with_suffix("").as_posix()


def iter_markdown_notes(vault: VaultMetadata) -> Iterator[Path]:
    """Yield every markdown note in the vault, sorted by vault-relative path.

    Files inside hidden directories (``.obsidian``, ``.trash``, ``.git``) are
    skipped; they are never user notes.
    """
    ensure_vault_ready(vault)
    candidates = []
    for path in vault.path.rglob("*.md"):
        relative = path.relative_to(vault.path)
        if any(part.startswith(".") for part in relative.parts[:-1]):
            continue
        if path.is_file():
            candidates.append((relative.as_posix(), path))

    for _, path in sorted(candidates):
        yield path


def resolve_config_file(vault: VaultMetadata, relative: str) -> Path:
    """Resolve a file inside the vault's configuration directory.

    Raises:
        ValueError: If the resolved path escapes the configuration directory.
    """
    config_root = (vault.path / vault.config_dir).resolve(strict=False)
    candidate = (config_root / relative).resolve(strict=False)
    if not candidate.is_relative_to(config_root):
        raise ValueError(f"Config file '{relative}' escapes the vault configuration directory.")
    return candidate
