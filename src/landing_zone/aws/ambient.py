"""Ambient account, region and KMS context providers.

The naming resolver and the bootstrap orchestrator never read credentials or
region settings on their own. They are handed an ``AmbientContextProvider``
so tests and offline runs can substitute fixed values.
"""

# Standard Library
from abc import ABC, abstractmethod
from typing import Dict, Optional

# Third Party
import boto3
from botocore.exceptions import BotoCoreError
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.aws.kms import KmsClient
from landing_zone.aws.sts import StsClient
from landing_zone.exceptions import AmbientLookupFailure

# Initialize logger
logger = Logger(service="ambient-context")


class AmbientContextProvider(ABC):
    """Interface for looking up account, region and KMS key context."""

    @abstractmethod
    def account_id(self) -> str:
        """Return the current account id or raise ``AmbientLookupFailure``."""

    @abstractmethod
    def region(self) -> str:
        """Return the current region or raise ``AmbientLookupFailure``."""

    @abstractmethod
    def caller_arn(self) -> str:
        """Return the caller ARN or raise ``AmbientLookupFailure``."""

    @abstractmethod
    def kms_key_arn(self, alias: str, region: str) -> str:
        """Resolve a KMS alias to a key ARN or raise AmbientLookupFailure."""


class Boto3AmbientProvider(AmbientContextProvider):
    """Ambient context backed by the default boto3 credential chain."""

    def __init__(self, region_name: Optional[str] = None) -> None:
        self.region_name = region_name
        self._sts: Optional[StsClient] = None
        self._kms: Dict[str, KmsClient] = {}

    def _sts_client(self) -> StsClient:
        if self._sts is None:
            try:
                self._sts = StsClient(region_name=self.region_name)
            except BotoCoreError as e:
                raise AmbientLookupFailure(
                    f"Unable to create STS client: {e}"
                ) from e
        return self._sts

    def _kms_client(self, region: str) -> KmsClient:
        if region not in self._kms:
            try:
                self._kms[region] = KmsClient(region_name=region)
            except BotoCoreError as e:
                raise AmbientLookupFailure(
                    f"Unable to create KMS client: {e}"
                ) from e
        return self._kms[region]

    def account_id(self) -> str:
        return self._sts_client().get_account_id()

    def caller_arn(self) -> str:
        return self._sts_client().get_caller_identity()["arn"]

    def region(self) -> str:
        region = self.region_name or boto3.session.Session().region_name
        if not region:
            raise AmbientLookupFailure("No AWS region is configured")
        return region

    def kms_key_arn(self, alias: str, region: str) -> str:
        return self._kms_client(region).describe_key_arn(alias)


class StaticAmbientProvider(AmbientContextProvider):
    """Ambient context with fixed values.

    Any value left as ``None`` behaves like a failed lookup, which lets
    callers exercise their fallback paths without AWS access.
    """

    def __init__(
        self,
        account_id: Optional[str] = None,
        region: Optional[str] = None,
        caller_arn: Optional[str] = None,
        kms_key_arns: Optional[Dict[str, str]] = None,
    ) -> None:
        self._account_id = account_id
        self._region = region
        self._caller_arn = caller_arn
        self._kms_key_arns = dict(kms_key_arns or {})

    def account_id(self) -> str:
        if self._account_id is None:
            raise AmbientLookupFailure("No account id configured")
        return self._account_id

    def region(self) -> str:
        if self._region is None:
            raise AmbientLookupFailure("No region configured")
        return self._region

    def caller_arn(self) -> str:
        if self._caller_arn is None:
            raise AmbientLookupFailure("No caller ARN configured")
        return self._caller_arn

    def kms_key_arn(self, alias: str, region: str) -> str:
        try:
            return self._kms_key_arns[alias]
        except KeyError:
            raise AmbientLookupFailure(
                f"No KMS key known for {alias} in {region}"
            ) from None


def resolve_kms_key_arn(
    provider: Optional[AmbientContextProvider], alias: str, region: str
) -> str:
    """Resolve ``alias`` to a key ARN, falling back to the alias itself.

    Parameters
    ----------
    provider : Optional[AmbientContextProvider]
        The provider used for the lookup. ``None`` skips the lookup.
    alias : str
        The KMS alias, e.g. ``alias/kms-acme-shop-sbx-euc2-tfstate``.
    region : str
        The region the key is expected in.

    Returns
    -------
    str
        The key ARN, or ``alias`` verbatim when it cannot be resolved.
    """
    if provider is None:
        return alias
    try:
        return provider.kms_key_arn(alias, region)
    except AmbientLookupFailure as e:
        logger.warning(
            "Using KMS alias verbatim, ARN lookup failed",
            extra={"alias": alias, "region": region, "error": str(e)},
        )
        return alias
