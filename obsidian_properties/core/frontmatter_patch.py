"""Targeted removal of a single value from a note's frontmatter.

The frontmatter block is never parsed into a mapping and dumped again, since
that would reformat lines the user did not ask to change. Instead the block is
scanned line by line just far enough to find one property, classify how its
value is written, and splice the affected line range.

Recognised shapes::

    status: active            # scalar
    tags: [a, "b", 'c']       # inline list
    tags:                     # block list
      - a
      - b

Every function here is pure and total: when the expected structure is not
present the input text is returned unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from obsidian_properties.constants import FRONTMATTER_DELIMITER

LINE_SEPARATOR = "\n"

_FIELD_PATTERN = re.compile(r"^(\s*)([^:]+):\s*(.*)$")
_BLOCK_LIST_OPENERS = ("", "[", "|")


class FieldShape(Enum):
    """How a property's value is laid out in the frontmatter text."""

    ABSENT = "absent"
    SCALAR = "scalar"
    INLINE_LIST = "inline_list"
    BLOCK_LIST = "block_list"


@dataclass(frozen=True)
class FieldLocation:
    """Position and shape of a property line inside the frontmatter block.

    ``name`` is the key exactly as written (before trimming), ``remainder``
    the trimmed text after the colon, and ``block_end`` the index of the
    closing delimiter line.
    """

    line_index: int
    indent: str
    shape: FieldShape
    name: str = ""
    remainder: str = ""
    block_end: int = -1


ABSENT = FieldLocation(line_index=-1, indent="", shape=FieldShape.ABSENT)


def find_frontmatter_bounds(lines: list[str]) -> Optional[tuple[int, int]]:
    """Return the indexes of the opening and closing ``---`` lines.

    The first delimiter line opens the block and the next one closes it.
    ``None`` means the note has no editable block.
    """
    opening: Optional[int] = None
    for index, line in enumerate(lines):
        if line.strip() != FRONTMATTER_DELIMITER:
            continue
        if opening is None:
            opening = index
        else:
            return opening, index
    return None


def classify_remainder(remainder: str) -> FieldShape:
    """Classify the trimmed text following a property's colon."""
    if remainder in _BLOCK_LIST_OPENERS:
        return FieldShape.BLOCK_LIST
    if remainder.startswith("[") and remainder.endswith("]"):
        return FieldShape.INLINE_LIST
    return FieldShape.SCALAR


def locate_property(lines: list[str], property_name: str) -> FieldLocation:
    """Find the first line declaring ``property_name`` inside the frontmatter.

    Later lines repeating the same key are never considered.
    """
    bounds = find_frontmatter_bounds(lines)
    if bounds is None:
        return ABSENT

    opening, closing = bounds
    for index in range(opening + 1, closing):
        match = _FIELD_PATTERN.match(lines[index])
        if match is None or match.group(2).strip() != property_name:
            continue
        remainder = match.group(3).strip()
        return FieldLocation(
            line_index=index,
            indent=match.group(1),
            shape=classify_remainder(remainder),
            name=match.group(2),
            remainder=remainder,
            block_end=closing,
        )
    return ABSENT


def matches_value(candidate: str, value: str) -> bool:
    """Return True when an inline-list item is ``value``, bare or in straight quotes."""
    return candidate in (value, f'"{value}"', f"'{value}'")


def _leading_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _remove_scalar(lines: list[str], location: FieldLocation, value: str) -> bool:
    if location.remainder != value:
        return False
    del lines[location.line_index]
    return True


def _remove_from_inline_list(lines: list[str], location: FieldLocation, value: str) -> bool:
    inner = location.remainder[1:-1]
    items = [item.strip() for item in inner.split(",")]
    items = [item for item in items if item]
    kept = [item for item in items if not matches_value(item, value)]
    if len(kept) == len(items):
        return False

    index = location.line_index
    if not kept:
        del lines[index]
        return True

    line_ending = "\r" if lines[index].endswith("\r") else ""
    lines[index] = f"{location.indent}{location.name}: [{', '.join(kept)}]{line_ending}"
    return True


def _remove_from_block_list(lines: list[str], location: FieldLocation, value: str) -> bool:
    start = location.line_index
    closing = location.block_end
    field_width = len(location.indent)

    # Lines before the first item stay with the header; deeper lines after an
    # item belong to that item.
    header = [lines[start]]
    items: list[list[str]] = []

    stop = start + 1
    while stop < closing:
        line = lines[stop]
        stripped = line.strip()
        width = _leading_width(line)
        # An item indented less than the field belongs to an enclosing list.
        if stripped.startswith("-") and width >= field_width:
            items.append([line])
        elif not stripped or width <= field_width:
            break
        elif items:
            items[-1].append(line)
        else:
            header.append(line)
        stop += 1

    kept = [item for item in items if item[0].strip()[1:].strip() != value]
    if len(kept) == len(items):
        return False

    replacement: list[str] = []
    if kept:
        replacement.extend(header)
        for item in kept:
            replacement.extend(item)

    lines[start:stop] = replacement
    return True


def remove_property_value(text: str, property_name: str, value: str) -> str:
    """Return ``text`` with ``value`` removed from ``property_name``'s frontmatter.

    The property line is deleted outright when its last value goes. Everything
    else in the note, frontmatter included, is preserved byte for byte. The
    original text comes back untouched when there is no frontmatter block, the
    property is absent, or the value is not present.

    Args:
        text: Raw note content.
        property_name: Frontmatter key to edit.
        value: Value to remove.

    Returns:
        The patched note content.

    Examples:
        >>> remove_property_value("---\\ntags: [a, b]\\n---\\n", "tags", "a")
        '---\\ntags: [b]\\n---\\n'
    """
    lines = text.split(LINE_SEPARATOR)
    location = locate_property(lines, property_name)

    if location.shape is FieldShape.SCALAR:
        changed = _remove_scalar(lines, location, value)
    elif location.shape is FieldShape.INLINE_LIST:
        changed = _remove_from_inline_list(lines, location, value)
    elif location.shape is FieldShape.BLOCK_LIST:
        changed = _remove_from_block_list(lines, location, value)
    else:
        changed = False

    if not changed:
        return text
    return LINE_SEPARATOR.join(lines)
