"""Utility helpers shared across the landing zone toolkit."""

# Local Modules
from landing_zone.utils.enums import BootstrapPhase, ProductKind, ResourceType

__all__ = [
    "BootstrapPhase",
    "ProductKind",
    "ResourceType",
]
