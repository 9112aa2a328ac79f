"""Aggregation of multitext property values across a vault."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, Optional

from obsidian_properties.core.property_types import PropertyTypeResolver
from obsidian_properties.core.vault_store import DocumentStore
from obsidian_properties.data_models import PropertyValueIndex

logger = logging.getLogger(__name__)


def stringify_value(value: Any) -> str:
    """Render a parsed frontmatter value the way it is spelled in YAML.

    :func:`parse_frontmatter` already keeps scalars as text. Stores that hand
    back typed values get booleans as ``true``/``false`` and dates in ISO
    format so the string can still be matched against the raw frontmatter.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def normalize_values(raw: Any) -> list[str]:
    """Coerce a property value into a list of strings, dropping ``None`` entries."""
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    return [stringify_value(item) for item in items if item is not None]


def build_property_index(
    store: DocumentStore,
    resolver: PropertyTypeResolver,
    known_values: Optional[Mapping[str, Iterable[str]]] = None,
) -> dict[str, PropertyValueIndex]:
    """Scan every note in ``store`` and index the values of multitext properties.

    Args:
        store: Source of notes and their parsed frontmatter.
        resolver: Decides which property names are indexed.
        known_values: Optional cache of values known per property. They are
            added with an empty note list, so values no note uses any more show
            up as orphaned.

    Returns:
        A dictionary keyed by property name in lexicographic order. Note lists
        keep enumeration order and may contain a note twice when its
        frontmatter repeats a value.
    """
    index: dict[str, PropertyValueIndex] = {}

    for name, values in (known_values or {}).items():
        if not resolver.is_multitext(name):
            continue
        for value in values:
            index.setdefault(name, PropertyValueIndex(property=name)).add(value)

    notes = store.list_documents()
    logger.debug("Scanning %d note(s) for multitext properties", len(notes))

    for note in notes:
        try:
            metadata = store.get_parsed_metadata(note)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.warning("Skipping note '%s' during property scan: %s", note, exc)
            continue

        if not metadata:
            continue

        for key, raw in metadata.items():
            if not isinstance(key, str) or not resolver.is_multitext(key):
                continue
            if raw is None:
                continue

            entry = index.setdefault(key, PropertyValueIndex(property=key))
            for value in normalize_values(raw):
                entry.add(value, note)

    logger.info(
        "Indexed %d multitext propert%s across %d note(s)",
        len(index),
        "y" if len(index) == 1 else "ies",
        len(notes),
    )
    return {name: index[name] for name in sorted(index)}
