"""Pydantic models for resolved resource names."""

# Standard Library
from typing import Dict

# Third Party
from pydantic import BaseModel, Field, ConfigDict

# Local Modules
from landing_zone.utils.enums import ResourceType


class StateBackendNames(BaseModel):
    """Names of the resources backing remote Terraform state.

    Attributes:
        bucket: S3 bucket holding the state files.
        kms_alias: Alias of the KMS key encrypting the state.
        lock_table: DynamoDB table used for legacy state locking.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(..., description="State bucket name")
    kms_alias: str = Field(..., description="State KMS key alias")
    lock_table: str = Field(..., description="State lock table name")


class ResolvedNaming(BaseModel):
    """Resource names and tags derived from an identity.

    Attributes:
        id: Dash-joined identifier with the full environment name.
        id_short: Dash-joined identifier with the one-letter environment code.
        region: AWS region the names were resolved for.
        region_code: Short code of the region.
        environment: Environment name.
        environment_code: One-letter environment code.
        account_id: AWS account id, the zero sentinel when unresolved.
        prefixes: Truncated name prefix per resource type.
        state: Names of the remote state backend resources.
        tags: Canonical tag map.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Full identifier")
    id_short: str = Field(..., description="Identifier with short env code")
    region: str = Field(..., description="AWS region")
    region_code: str = Field(..., description="Short region code")
    environment: str = Field(..., description="Environment name")
    environment_code: str = Field(..., description="Short environment code")
    account_id: str = Field(..., description="AWS account id")
    prefixes: Dict[str, str] = Field(
        default_factory=dict, description="Name prefix per resource type"
    )
    state: StateBackendNames = Field(
        ..., description="Remote state backend resource names"
    )
    tags: Dict[str, str] = Field(
        default_factory=dict, description="Canonical tag map"
    )

    def prefix(self, resource_type: ResourceType) -> str:
        """Return the name prefix for ``resource_type``."""
        return self.prefixes[ResourceType(resource_type).value]
