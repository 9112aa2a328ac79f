"""Document and declaration stores backing the property index.

The aggregator and the deletion manager only talk to a :class:`DocumentStore`.
:class:`VaultDocumentStore` implements it over an Obsidian vault on disk; tests
substitute an in-memory fake.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol, runtime_checkable

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from obsidian_properties.constants import FRONTMATTER_DELIMITER
from obsidian_properties.core.vault_operations import (
    iter_markdown_notes,
    note_display_name,
    resolve_config_file,
)
from obsidian_properties.data_models import NoteRef, VaultMetadata

logger = logging.getLogger(__name__)

_KEPT_TAGS = ("tag:yaml.org,2002:null", "tag:yaml.org,2002:merge")


class TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as written, apart from nulls and merge keys.

    Obsidian stores property values as text, so ``yes``, ``010`` or ``2024-01-01``
    must come back with the spelling the note uses.
    """


TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class TextYAMLHandler(YAMLHandler):
    """YAML frontmatter handler that parses with :class:`TextScalarLoader`."""

    def load(self, fm: str, **kwargs: Any) -> Any:
        kwargs["Loader"] = TextScalarLoader
        return yaml.load(fm, **kwargs)


@runtime_checkable
class DocumentStore(Protocol):
    """Host-side access to notes and to the vault configuration directory."""

    def list_documents(self) -> list[NoteRef]:
        """Return every note, in a stable enumeration order."""
        ...

    def get_parsed_metadata(self, note: NoteRef) -> Optional[dict[str, Any]]:
        """Return the note's parsed frontmatter, or ``None`` when it has none."""
        ...

    def read_text(self, note: NoteRef) -> str:
        ...

    def write_text(self, note: NoteRef, text: str) -> None:
        """Persist ``text`` for ``note``; raises :class:`OSError` on failure."""
        ...

    def read_config_file(self, relative: str) -> str:
        """Return the raw content of a file in the vault configuration directory."""
        ...


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter metadata and note body from raw text.

    Args:
        text: Raw markdown text, possibly containing a frontmatter block.

    Returns:
        A tuple of ``(metadata, content)`` where ``metadata`` is the parsed YAML
        dictionary (empty when no frontmatter is present) and ``content`` is the
        markdown body without the frontmatter block.

    Plain scalars keep their spelling: ``yes`` stays ``"yes"`` and ``010``
    stays ``"010"``. Empty values and ``~`` still load as ``None``.

    Raises:
        ValueError: If the frontmatter block exists but cannot be parsed as YAML.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text, handler=TextYAMLHandler())
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter contains invalid YAML: {exc}") from exc

    metadata = post.metadata
    if not isinstance(metadata, Mapping):
        raise ValueError("Frontmatter must be a mapping of property names to values.")

    content = post.content if post.content is not None else ""
    return dict(metadata), content


def has_frontmatter(text: str) -> bool:
    """Return True when ``text`` opens with a frontmatter delimiter line."""
    first_line = text.lstrip().split("\n", 1)[0]
    return first_line.strip() == FRONTMATTER_DELIMITER


class VaultDocumentStore:
    """Filesystem-backed :class:`DocumentStore` for a single vault."""

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault

    def __repr__(self) -> str:
        return f"VaultDocumentStore(vault={self.vault.name!r})"

    def list_documents(self) -> list[NoteRef]:
        return [
            NoteRef(name=note_display_name(self.vault, path), path=path)
            for path in iter_markdown_notes(self.vault)
        ]

    def get_parsed_metadata(self, note: NoteRef) -> Optional[dict[str, Any]]:
        text = self.read_text(note)
        if not has_frontmatter(text):
            return None
        metadata, _ = parse_frontmatter(text)
        return metadata

    def read_text(self, note: NoteRef) -> str:
        return note.path.read_text(encoding="utf-8")

    def write_text(self, note: NoteRef, text: str) -> None:
        note.path.write_text(text, encoding="utf-8")
        logger.debug("Wrote note '%s' in vault '%s'", note.name, self.vault.name)

    def read_config_file(self, relative: str) -> str:
        return resolve_config_file(self.vault, relative).read_text(encoding="utf-8")
