"""STS client wrapper for resolving the caller identity."""

# Standard Library
from typing import Dict, Optional

# Third Party
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.exceptions import AmbientLookupFailure

# Initialize logger
logger = Logger(service="sts-client-wrapper")


class StsClient:
    """A client for reading the identity behind the active AWS credentials."""

    def __init__(self, region_name: Optional[str] = None) -> None:
        """Initialize the STS client.

        Parameters
        ----------
        region_name : Optional[str]
            The AWS region to send STS requests to. If not provided, the
            default region from the AWS configuration will be used.
        """
        try:
            self.client = boto3.client("sts", region_name=region_name)
        except Exception as e:
            logger.error("Failed to create STS client: %s", e)
            raise

    def get_caller_identity(self) -> Dict[str, str]:
        """Fetch the account id and ARN of the current caller.

        Returns
        -------
        Dict[str, str]
            A dictionary with ``account`` and ``arn`` keys.

        Raises
        ------
        AmbientLookupFailure
            If the credentials are missing or the request fails.
        """
        try:
            response = self.client.get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get caller identity: {e}")
            raise AmbientLookupFailure(
                f"Unable to resolve caller identity: {e}"
            ) from e

        return {
            "account": str(response.get("Account", "")),
            "arn": str(response.get("Arn", "")),
        }

    def get_account_id(self) -> str:
        """Return the 12-digit account id of the current caller."""
        return self.get_caller_identity()["account"]
