"""Consistency checks for every layer's generated backend-config file."""

# Standard Library
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.bootstrap.backend_config import read_backend_values
from landing_zone.bootstrap.layers import (
    BOOTSTRAP_LAYER,
    backend_config_path,
    discover_layer_dirs,
    layer_for_directory,
)
from landing_zone.exceptions import ConfigurationError

# Initialize logger
logger = Logger(service="backend-validator")

REQUIRED_FIELDS = ("bucket", "key", "region", "kms_key_id")


@dataclass
class LayerReport:
    """Validation outcome for a single layer."""

    directory: str
    path: Path
    exists: bool
    values: Dict[str, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.exists and not self.errors


@dataclass
class ValidationReport:
    """Validation outcome for every layer of an environment."""

    environment: str
    layers: List[LayerReport] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return sum(1 for layer in self.layers if layer.valid)

    @property
    def invalid_count(self) -> int:
        return sum(1 for layer in self.layers if layer.exists and layer.errors)

    @property
    def missing_count(self) -> int:
        return sum(1 for layer in self.layers if not layer.exists)

    @property
    def ok(self) -> bool:
        return self.invalid_count == 0 and self.missing_count == 0


def check_layer(
    terraform_dir: Path,
    environment: str,
    expected_bucket: Optional[str] = None,
) -> LayerReport:
    """Validate one layer's backend-config file.

    Parameters
    ----------
    terraform_dir : Path
        The layer's ``terraform`` directory.
    environment : str
        Environment whose file is checked.
    expected_bucket : Optional[str]
        Bucket every layer must share. Not compared when ``None``.

    Returns
    -------
    LayerReport
        The file's values and any problems found.
    """
    directory = terraform_dir.parent.name
    path = backend_config_path(terraform_dir, environment)

    if not path.is_file():
        logger.warning(f"Backend config missing for {directory}: {path}")
        return LayerReport(directory=directory, path=path, exists=False)

    try:
        values = read_backend_values(path)
    except ConfigurationError as e:
        logger.warning(f"Backend config unreadable for {directory}: {e}")
        return LayerReport(
            directory=directory, path=path, exists=True, errors=[str(e)]
        )

    errors = [
        f"{name} is empty or not set"
        for name in REQUIRED_FIELDS
        if not values.get(name)
    ]

    layer = layer_for_directory(directory)
    key = values.get("key")
    if layer is not None and key and key != layer.state_key:
        errors.append(
            f"key mismatch: expected '{layer.state_key}', got '{key}'"
        )

    bucket = values.get("bucket")
    if expected_bucket and bucket and bucket != expected_bucket:
        errors.append(
            f"bucket mismatch: expected '{expected_bucket}', got '{bucket}'"
        )

    if errors:
        logger.warning(
            f"Backend config invalid for {directory}",
            extra={"errors": errors},
        )

    return LayerReport(
        directory=directory,
        path=path,
        exists=True,
        values=values,
        errors=errors,
    )


def validate_backend_configs(
    project_root: Union[str, Path], environment: str
) -> ValidationReport:
    """Validate the backend-config files of every layer for ``environment``.

    The bootstrap layer's bucket is the reference every other layer has to
    match.

    Raises
    ------
    ConfigurationError
        If the bootstrap layer's backend-config file cannot be decoded.
    """
    project_root = Path(project_root)
    bootstrap_config = backend_config_path(
        project_root / BOOTSTRAP_LAYER.directory / "terraform", environment
    )
    expected_bucket = read_backend_values(bootstrap_config).get("bucket")

    report = ValidationReport(environment=environment)
    for terraform_dir in discover_layer_dirs(project_root):
        report.layers.append(
            check_layer(terraform_dir, environment, expected_bucket)
        )

    logger.info(
        "Backend configs validated",
        extra={
            "environment": environment,
            "valid": report.valid_count,
            "invalid": report.invalid_count,
            "missing": report.missing_count,
        },
    )
    return report
