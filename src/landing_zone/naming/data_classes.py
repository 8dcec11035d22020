# Standard Library
from typing import Mapping, Optional
from dataclasses import dataclass, field

# Local Modules
from landing_zone import config
from landing_zone.exceptions import ConfigurationError
from landing_zone.utils.enums import ProductKind


@dataclass(frozen=True)
class IdentityContext:
    """Identity attributes that every resource name is derived from.

    Values are validated by the resolver, not on construction, so a
    malformed context surfaces as a ``ValidationError`` naming the field.

    Attributes
    ----------
        org : str
            Display name of the organization.
        org_moniker : str
            Short organization abbreviation used in names.
        product : str
            Display name of the product (or client).
        product_moniker : str
            Short product abbreviation used in names.
        environment : str
            Deployment environment, e.g. ``sbx``.
        layer : str
            Deployment layer, e.g. ``bootstrap``.
        semantic_version : str
            Version recorded in the governance tag.
        aws_region : Optional[str]
            Target region; looked up when ``None``.
        aws_account_id : Optional[str]
            Target account; looked up when ``None``.
    """

    org: str = field(metadata={"description": "Organization display name."})
    org_moniker: str = field(
        metadata={"description": "Short organization abbreviation."}
    )
    product: str = field(metadata={"description": "Product display name."})
    product_moniker: str = field(
        metadata={"description": "Short product abbreviation."}
    )
    environment: str = field(
        metadata={"description": "Deployment environment."}
    )
    layer: str = field(metadata={"description": "Deployment layer name."})
    semantic_version: str = field(
        default=config.DEFAULT_SEMANTIC_VERSION,
        metadata={"description": "Semantic version for the governance tag."},
    )
    aws_region: Optional[str] = field(
        default=None,
        metadata={"description": "AWS region, looked up when unset."},
    )
    aws_account_id: Optional[str] = field(
        default=None,
        metadata={"description": "AWS account id, looked up when unset."},
    )
    org_domain: Optional[str] = field(
        default=None,
        metadata={"description": "Optional organization domain tag."},
    )
    data_residency: Optional[str] = field(
        default=None,
        metadata={"description": "Optional data residency tag."},
    )
    pipeline: str = field(
        default=config.DEFAULT_PIPELINE,
        metadata={"description": "Automation pipeline tag."},
    )
    cost_center: Optional[str] = field(
        default=None,
        metadata={"description": "Cost center tag, org moniker when unset."},
    )
    product_kind: ProductKind = field(
        default=ProductKind.product,
        metadata={"description": "Whether the product is called a client."},
    )
    environment_set: str = field(
        default=config.ENVIRONMENT_SET,
        metadata={"description": "Name of the allowed environment set."},
    )

    @classmethod
    def from_tfvars(
        cls,
        values: Mapping[str, str],
        environment: str,
        layer: str,
        environment_set: Optional[str] = None,
    ) -> "IdentityContext":
        """Build a context from a parsed ``common.auto.tfvars`` mapping.

        Parameters
        ----------
        values : Mapping[str, str]
            Key/value pairs read from the tfvars file.
        environment : str
            The environment being deployed.
        layer : str
            The layer being deployed.
        environment_set : Optional[str]
            The environment set to validate against, defaults to the
            configured one.

        Returns
        -------
        IdentityContext
            The identity described by the file.

        Raises
        ------
        ConfigurationError
            If ``aws_region``, ``org_moniker`` or the product/client moniker
            is missing.
        """
        product_kind = ProductKind.product
        product_moniker = values.get("product_moniker")
        product = values.get("product")
        if not product_moniker and values.get("client_moniker"):
            product_kind = ProductKind.client
            product_moniker = values.get("client_moniker")
            product = values.get("client")

        required = {
            "aws_region": values.get("aws_region"),
            "org_moniker": values.get("org_moniker"),
            "product_moniker": product_moniker,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigurationError(
                "Failed to extract required values from "
                f"{config.COMMON_TFVARS_FILE}: " + ", ".join(missing)
            )

        org_moniker = required["org_moniker"]
        return cls(
            org=values.get("org") or org_moniker,
            org_moniker=org_moniker,
            product=product or product_moniker,
            product_moniker=product_moniker,
            environment=environment,
            layer=layer,
            semantic_version=values.get("semantic_version")
            or config.DEFAULT_SEMANTIC_VERSION,
            aws_region=required["aws_region"],
            aws_account_id=values.get("aws_account_id") or None,
            org_domain=values.get("org_domain") or None,
            data_residency=values.get("data_residency") or None,
            pipeline=values.get("pipeline") or config.DEFAULT_PIPELINE,
            cost_center=values.get("cost_center") or None,
            product_kind=product_kind,
            environment_set=environment_set or config.ENVIRONMENT_SET,
        )
