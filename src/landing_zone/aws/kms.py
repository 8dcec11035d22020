"""KMS client wrapper for resolving key aliases to key ARNs."""

# Standard Library
from typing import Optional

# Third Party
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.exceptions import AmbientLookupFailure

# Initialize logger
logger = Logger(service="kms-client-wrapper")


class KmsClient:
    """A client for looking up KMS key metadata."""

    def __init__(self, region_name: Optional[str] = None) -> None:
        """Initialize the KMS client.

        Parameters
        ----------
        region_name : Optional[str]
            The AWS region where the keys live. If not provided, the default
            region from the AWS configuration will be used.
        """
        self.region_name = region_name
        try:
            self.client = boto3.client("kms", region_name=region_name)
        except Exception as e:
            logger.error("Failed to create KMS client: %s", e)
            raise

    def describe_key_arn(self, key_id: str) -> str:
        """Resolve a key id, key ARN or alias to the key ARN.

        Parameters
        ----------
        key_id : str
            Anything ``DescribeKey`` accepts, e.g. ``alias/my-key``.

        Returns
        -------
        str
            The ARN of the key.

        Raises
        ------
        AmbientLookupFailure
            If the key does not exist or the request fails.
        """
        try:
            response = self.client.describe_key(KeyId=key_id)
        except (ClientError, BotoCoreError) as e:
            logger.warning(
                "Failed to describe KMS key %s in %s: %s",
                key_id,
                self.region_name,
                e,
            )
            raise AmbientLookupFailure(
                f"Unable to resolve KMS key {key_id}: {e}"
            ) from e

        arn = response.get("KeyMetadata", {}).get("Arn")
        if not arn:
            raise AmbientLookupFailure(f"KMS key {key_id} has no ARN")
        return arn
