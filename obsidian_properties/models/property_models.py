"""Pydantic input models for multitext property operations.

This module defines input models for:
- Listing multitext properties
- Listing the values of one property
- Deleting a value from every note (or an orphaned value from the cache)
- Forcing a rescan of the vault
"""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import BasePropertyInput, BaseVaultInput


class ListPropertiesInput(BaseVaultInput):
    """Input model for list_multitext_properties tool.

    Examples:
        >>> ListPropertiesInput()
        >>> ListPropertiesInput(vault="work")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": None},
                {"vault": "work"}
            ]
        }


class RescanPropertiesInput(BaseVaultInput):
    """Input model for rescan_properties tool."""


class ListPropertyValuesInput(BasePropertyInput):
    """Input model for list_property_values tool.

    Examples:
        >>> ListPropertyValuesInput(property="tags")
        >>> ListPropertyValuesInput(property="Status", include_files=True, vault="work")
    """

    include_files: bool = Field(
        False,
        description=(
            "If True, include the notes using each value. "
            "Adds one entry per note and value."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"property": "tags", "include_files": False, "vault": None},
                {"property": "Status", "include_files": True, "vault": "work"}
            ]
        }


class DeletePropertyValueInput(BasePropertyInput):
    """Input model for delete_property_value tool.

    Removes one value from the property in every note that uses it. When the
    ``confirm_before_delete`` setting is on, the first call without
    ``confirm=True`` only returns a preview.

    Examples:
        >>> DeletePropertyValueInput(property="tags", value="draft")
        >>> DeletePropertyValueInput(property="Status", value="stale", confirm=True)
    """

    value: str = Field(
        min_length=1,
        description=(
            "Value to remove, as listed by list_property_values(). "
            "Matches bare and quoted spellings in frontmatter."
        ),
        examples=["draft", "stale"]
    )

    confirm: bool = Field(
        False,
        description=(
            "Set to True to perform the deletion when confirmation is required. "
            "This action cannot be undone."
        )
    )

    @field_validator('value')
    @classmethod
    def validate_value(cls, v: str) -> str:
        """Reject values that are blank after trimming.

        The value is returned as given: frontmatter values are compared
        verbatim, so surrounding whitespace is never stored in them anyway.
        """
        if not v.strip():
            raise ValueError(
                "Value cannot be empty. "
                "Use list_property_values() to see the values of a property."
            )
        return v

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"property": "tags", "value": "draft", "confirm": False, "vault": None},
                {"property": "Status", "value": "stale", "confirm": True, "vault": "work"}
            ]
        }
