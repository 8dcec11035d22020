"""Project-level inputs shared by every layer."""

# Standard Library
from pathlib import Path
from typing import Optional, Union

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.bootstrap.tfvars import read_tfvars
from landing_zone.exceptions import ConfigurationError
from landing_zone.naming.data_classes import IdentityContext

# Initialize logger
logger = Logger(service="project")


def common_tfvars_path(project_root: Union[str, Path]) -> Path:
    return Path(project_root) / config.COMMON_TFVARS_FILE


def load_identity(
    project_root: Union[str, Path],
    environment: str,
    layer: str,
    environment_set: Optional[str] = None,
) -> IdentityContext:
    """Build the identity for ``layer`` from ``common.auto.tfvars``.

    Parameters
    ----------
    project_root : Union[str, Path]
        Directory holding ``common.auto.tfvars``.
    environment : str
        Environment being deployed.
    layer : str
        Layer being deployed.
    environment_set : Optional[str]
        Environment set to validate against.

    Returns
    -------
    IdentityContext
        The identity described by the project's common variables.

    Raises
    ------
    ConfigurationError
        If the file is missing or lacks a required value.
    """
    path = common_tfvars_path(project_root)
    if not path.is_file():
        message = f"{config.COMMON_TFVARS_FILE} not found at {path}"
        template = Path(project_root) / config.COMMON_TFVARS_TEMPLATE
        if template.is_file():
            message += (
                f". Create it from the template: cp {template} {path} and "
                "set aws_region, org, org_moniker, product, product_moniker "
                "and semantic_version"
            )
        logger.error(message)
        raise ConfigurationError(message)

    return IdentityContext.from_tfvars(
        read_tfvars(path),
        environment=environment,
        layer=layer,
        environment_set=environment_set,
    )
