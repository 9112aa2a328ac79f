"""Pydantic input models for MCP tool validation.

Each model is the input schema of one MCP tool. Validation runs before any
vault is touched, so malformed requests fail with a descriptive
``ValidationError``.

Architecture:
- base: Base models (BaseVaultInput, BasePropertyInput)
- property_models: Input models for multitext property tools
- vault_models: Input models for vault selection tools

Usage:
    from obsidian_properties.models import DeletePropertyValueInput
"""

from .base import BasePropertyInput, BaseVaultInput
from .property_models import (
    DeletePropertyValueInput,
    ListPropertiesInput,
    ListPropertyValuesInput,
    RescanPropertiesInput,
)
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseVaultInput",
    "BasePropertyInput",
    # Property models
    "ListPropertiesInput",
    "ListPropertyValuesInput",
    "DeletePropertyValueInput",
    "RescanPropertiesInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
