"""Deployment layer table and on-disk discovery.

Layers live in numbered directories at the project root, each with a
``terraform`` subdirectory, e.g. ``03-infrastructure/terraform``.
"""

# Standard Library
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.bootstrap.backend_config import read_backend_values
from landing_zone.exceptions import ConfigurationError

# Initialize logger
logger = Logger(service="layers")

STATE_FILE_NAME = "terraform.tfstate"
LAYER_DIR_GLOB = "0*-*/terraform"


@dataclass(frozen=True)
class Layer:
    """A deployment layer with its own remote state file."""

    directory: str
    name: str
    state_key: str


LAYERS: Tuple[Layer, ...] = (
    Layer("01-bootstrap", "bootstrap", "bootstrap/terraform.tfstate"),
    Layer("02-governance", "governance", "governance/terraform.tfstate"),
    Layer(
        "03-infrastructure",
        "infrastructure",
        "infrastructure/terraform.tfstate",
    ),
    Layer("04-data-and-ai", "data-and-ai", "data-and-ai/terraform.tfstate"),
    Layer("05-compute", "compute", "compute/terraform.tfstate"),
    Layer(
        "06-applications", "applications", "applications/terraform.tfstate"
    ),
)

BOOTSTRAP_LAYER = LAYERS[0]


def layer_for_directory(directory: str) -> Optional[Layer]:
    """Return the known layer stored in ``directory``, if any."""
    for layer in LAYERS:
        if layer.directory == directory:
            return layer
    return None


def layer_for_name(name: str) -> Optional[Layer]:
    """Return the known layer called ``name``, if any."""
    for layer in LAYERS:
        if layer.name == name:
            return layer
    return None


def strip_layer_number(directory: str) -> str:
    """Drop the leading ``NN-`` from a layer directory name."""
    if directory[:1].isdigit() and "-" in directory:
        return directory.split("-", 1)[1]
    return directory


def resolve_layer_directory(
    name: str, project_root: Union[str, Path]
) -> str:
    """Map a layer name to its directory name.

    Known layers come from the fixed table; anything else is looked up by
    directory name under ``project_root``.

    Raises
    ------
    ConfigurationError
        If no directory matches ``name``.
    """
    layer = layer_for_name(name)
    if layer is not None:
        return layer.directory

    logger.warning(
        f"Layer '{name}' not in standard mapping, trying direct lookup"
    )
    project_root = Path(project_root)
    candidates: List[str] = []
    if project_root.is_dir():
        candidates = sorted(
            path.name
            for path in project_root.iterdir()
            if path.is_dir() and name in path.name
        )
    if not candidates:
        available = ", ".join(layer.name for layer in LAYERS)
        raise ConfigurationError(
            f"Could not find layer directory for '{name}'. "
            f"Available layers: {available}"
        )
    return candidates[0]


def discover_layer_dirs(project_root: Union[str, Path]) -> List[Path]:
    """Return every ``0*-*/terraform`` directory under ``project_root``."""
    return sorted(
        path
        for path in Path(project_root).glob(LAYER_DIR_GLOB)
        if path.is_dir()
    )


def environment_dir(terraform_dir: Union[str, Path], environment: str) -> Path:
    return Path(terraform_dir) / "environments" / environment


def backend_config_path(
    terraform_dir: Union[str, Path], environment: str
) -> Path:
    return (
        environment_dir(terraform_dir, environment)
        / config.BACKEND_CONFIG_FILE
    )


def backend_template_path(terraform_dir: Union[str, Path]) -> Path:
    return Path(terraform_dir) / config.BACKEND_CONFIG_TEMPLATE


def environment_tfvars_path(
    terraform_dir: Union[str, Path], environment: str
) -> Path:
    return environment_dir(terraform_dir, environment) / config.ENV_TFVARS_FILE


def state_key_for(directory: str, existing_config: Union[str, Path]) -> str:
    """Return the state key for the layer stored in ``directory``.

    Known layers use the fixed table. Other layers keep the key already in
    their backend-config file, or fall back to
    ``<name-without-number>/terraform.tfstate``.
    """
    layer = layer_for_directory(directory)
    if layer is not None:
        return layer.state_key

    existing_key = read_backend_values(existing_config).get("key")
    if existing_key:
        return existing_key

    return f"{strip_layer_number(directory)}/{STATE_FILE_NAME}"
