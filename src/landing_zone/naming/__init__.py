"""Naming module for the landing zone toolkit.

This module exposes the identity dataclass, the resolved naming models and
the ``resolve`` function that derives AWS resource names and tags.
"""

# Local Modules
from landing_zone.naming.data_classes import IdentityContext
from landing_zone.naming.models import ResolvedNaming, StateBackendNames
from landing_zone.naming.resolver import (
    env_to_short,
    region_to_short,
    resolve,
    truncate,
)

__all__ = [
    "IdentityContext",
    "ResolvedNaming",
    "StateBackendNames",
    "env_to_short",
    "region_to_short",
    "resolve",
    "truncate",
]
