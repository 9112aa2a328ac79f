"""Shared fixtures: an in-memory document store and an on-disk test vault."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from obsidian_properties.core.vault_store import has_frontmatter, parse_frontmatter
from obsidian_properties.data_models import NoteRef, VaultMetadata


class FakeDocumentStore:
    """In-memory DocumentStore with injectable failures."""

    def __init__(
        self,
        notes: Optional[dict[str, str]] = None,
        types: Optional[dict[str, str]] = None,
        types_raw: Optional[str] = None,
    ) -> None:
        self.texts: dict[str, str] = dict(notes or {})
        if types_raw is None and types is not None:
            types_raw = json.dumps({"types": types})
        self.types_raw = types_raw
        self.failing_writes: set[str] = set()
        self.failing_reads: set[str] = set()
        self.metadata_overrides: dict[str, Optional[dict[str, Any]]] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []

    def ref(self, name: str) -> NoteRef:
        return NoteRef(name=name, path=Path("/fake-vault") / f"{name}.md")

    def list_documents(self) -> list[NoteRef]:
        return [self.ref(name) for name in self.texts]

    def get_parsed_metadata(self, note: NoteRef) -> Optional[dict[str, Any]]:
        if note.name in self.metadata_overrides:
            return self.metadata_overrides[note.name]
        text = self.texts[note.name]
        if not has_frontmatter(text):
            return None
        metadata, _ = parse_frontmatter(text)
        return metadata

    def read_text(self, note: NoteRef) -> str:
        self.reads.append(note.name)
        if note.name in self.failing_reads:
            raise OSError(f"cannot read {note.name}")
        return self.texts[note.name]

    def write_text(self, note: NoteRef, text: str) -> None:
        if note.name in self.failing_writes:
            raise PermissionError(f"cannot write {note.name}")
        self.writes.append(note.name)
        self.texts[note.name] = text

    def read_config_file(self, relative: str) -> str:
        if self.types_raw is None:
            raise FileNotFoundError(relative)
        return self.types_raw


@pytest.fixture
def fake_store_factory():
    return FakeDocumentStore


@pytest.fixture
def test_vault(tmp_path):
    """Create an on-disk vault with declared multitext properties."""
    vault_path = tmp_path / "test_vault"
    vault_path.mkdir()

    config_dir = vault_path / ".obsidian"
    config_dir.mkdir()
    (config_dir / "types.json").write_text(
        json.dumps(
            {
                "types": {
                    "tags": "multitext",
                    "related": "multitext",
                    "status": "text",
                    "rating": "number",
                }
            }
        ),
        encoding="utf-8",
    )

    (vault_path / "alpha.md").write_text(
        "---\ntitle: Alpha\ntags:\n  - draft\n  - python\nstatus: active\n---\n# Alpha\n",
        encoding="utf-8",
    )
    (vault_path / "beta.md").write_text(
        "---\ntags: [python, draft, \"mcp\"]\nrelated: Alpha\n---\nBeta body\n",
        encoding="utf-8",
    )
    projects = vault_path / "projects"
    projects.mkdir()
    (projects / "gamma.md").write_text(
        "---\ntags: draft\n---\nGamma body mentions draft: yes\n",
        encoding="utf-8",
    )
    (vault_path / "plain.md").write_text("# No frontmatter\n", encoding="utf-8")

    trash = vault_path / ".trash"
    trash.mkdir()
    (trash / "deleted.md").write_text("---\ntags: [trashed]\n---\n", encoding="utf-8")

    return VaultMetadata(
        name="test",
        path=vault_path,
        description="Test vault",
        exists=True,
    )
