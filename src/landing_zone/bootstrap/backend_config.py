"""Backend-config model and template rendering.

A backend-config file tells a layer where its remote state lives. Files are
rendered from each layer's ``backend-config.hcl.template`` by literal
replacement of a fixed set of ``{{PLACEHOLDER}}`` tokens; nothing else in
the template is parsed or validated.
"""

# Standard Library
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

# Third Party
from pydantic import BaseModel, Field, ConfigDict
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.bootstrap.tfvars import read_tfvars
from landing_zone.exceptions import ConfigurationError

# Initialize logger
logger = Logger(service="backend-config")

PLACEHOLDERS: Tuple[str, ...] = ("BUCKET", "KEY", "REGION", "KMS_ALIAS", "ENV")


class BackendConfig(BaseModel):
    """Location of a layer's remote state.

    Attributes:
        bucket: S3 bucket holding the state file.
        key: Object key of the state file within the bucket.
        region: Region of the bucket.
        kms_key_id: KMS key ARN or alias encrypting the state.
        env_label: Environment the configuration belongs to.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(..., min_length=1, description="State bucket")
    key: str = Field(..., min_length=1, description="State object key")
    region: str = Field(..., min_length=1, description="Bucket region")
    kms_key_id: str = Field(
        ..., min_length=1, description="KMS key ARN or alias"
    )
    env_label: str = Field(..., description="Environment label")

    def template_values(self) -> Dict[str, str]:
        """Return the placeholder substitutions for this configuration."""
        return {
            "BUCKET": self.bucket,
            "KEY": self.key,
            "REGION": self.region,
            "KMS_ALIAS": self.kms_key_id,
            "ENV": self.env_label,
        }


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Substitute the known placeholders in ``template``.

    Parameters
    ----------
    template : str
        Template text containing ``{{BUCKET}}``-style tokens.
    values : Mapping[str, str]
        Replacement per placeholder name. Names outside ``PLACEHOLDERS``
        are ignored.

    Returns
    -------
    str
        The rendered text. Unknown tokens are left untouched.
    """
    rendered = template
    for name in PLACEHOLDERS:
        if name in values:
            rendered = rendered.replace("{{" + name + "}}", values[name])
    return rendered


def write_backend_config(
    template_path: Union[str, Path],
    output_path: Union[str, Path],
    backend: BackendConfig,
) -> Path:
    """Render ``template_path`` for ``backend`` into ``output_path``.

    The output file is overwritten; missing parent directories are created.

    Raises
    ------
    ConfigurationError
        If the template file does not exist.
    """
    template_path = Path(template_path)
    output_path = Path(output_path)

    if not template_path.is_file():
        logger.error(f"Template file not found: {template_path}")
        raise ConfigurationError(f"Template file not found: {template_path}")

    template = template_path.read_text(encoding="utf-8")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        render_template(template, backend.template_values()), encoding="utf-8"
    )
    logger.info(
        "Backend configuration written",
        extra={"path": str(output_path), "key": backend.key},
    )
    return output_path


def read_backend_values(path: Union[str, Path]) -> Dict[str, str]:
    """Read the quoted values of a backend-config file.

    Returns an empty mapping when the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        return {}
    return read_tfvars(path)


def existing_bucket(path: Union[str, Path]) -> Optional[str]:
    """Return the non-empty ``bucket`` value of a backend-config file."""
    bucket = read_backend_values(path).get("bucket", "")
    return bucket or None
