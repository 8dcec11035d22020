"""Bootstrap module for the landing zone toolkit.

This module contains the Terraform wrapper, the backend-config rendering
helpers, the layer table and the orchestrator that brings up the remote
state backend for an environment.
"""

# Local Modules
from landing_zone.bootstrap.backend_config import (
    BackendConfig,
    render_template,
    write_backend_config,
)
from landing_zone.bootstrap.layers import LAYERS, Layer
from landing_zone.bootstrap.orchestrator import (
    BootstrapOptions,
    BootstrapOrchestrator,
    BootstrapResult,
    BootstrapState,
)
from landing_zone.bootstrap.project import load_identity
from landing_zone.bootstrap.terraform import StateBackendClient, TerraformCli
from landing_zone.bootstrap.validator import validate_backend_configs

__all__ = [
    "BackendConfig",
    "render_template",
    "write_backend_config",
    "LAYERS",
    "Layer",
    "BootstrapOptions",
    "BootstrapOrchestrator",
    "BootstrapResult",
    "BootstrapState",
    "load_identity",
    "StateBackendClient",
    "TerraformCli",
    "validate_backend_configs",
]
