"""AWS module for the landing zone toolkit.

This module provides thin boto3 wrappers for STS and KMS and the ambient
context providers built on top of them, so the rest of the codebase never
creates boto3 clients directly.
"""

# Local Modules
from landing_zone.aws.kms import KmsClient
from landing_zone.aws.sts import StsClient
from landing_zone.aws.ambient import (
    AmbientContextProvider,
    Boto3AmbientProvider,
    StaticAmbientProvider,
    resolve_kms_key_arn,
)

__all__ = [
    "KmsClient",
    "StsClient",
    "AmbientContextProvider",
    "Boto3AmbientProvider",
    "StaticAmbientProvider",
    "resolve_kms_key_arn",
]
