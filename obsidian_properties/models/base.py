"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseVaultInput: Optional vault selection shared by every property tool
- BasePropertyInput: Adds the multitext property name
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class BaseVaultInput(BaseModel):
    """Base model for operations scoped to a vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank vault names; strip surrounding whitespace."""
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BasePropertyInput(BaseVaultInput):
    """Base model for operations on a single multitext property."""

    property: str = Field(
        min_length=1,
        description=(
            "Frontmatter property name, exactly as declared in types.json "
            "(case-sensitive). Examples: 'tags', 'Status', 'related'."
        ),
        examples=["tags", "Status", "related"]
    )

    @field_validator('property')
    @classmethod
    def validate_property(cls, v: str) -> str:
        """Validate property name format.

        Property names are frontmatter keys, so they cannot contain a colon
        and cannot be blank.

        Raises:
            ValueError: If the name is blank or contains ':'
        """
        cleaned = v.strip()

        if not cleaned:
            raise ValueError(
                "Property name cannot be empty. "
                "Use list_multitext_properties() to see available properties."
            )

        if ":" in cleaned:
            raise ValueError(
                "Property name cannot contain ':'. "
                f"Invalid property: '{cleaned}'"
            )

        return cleaned
