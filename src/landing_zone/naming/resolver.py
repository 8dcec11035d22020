"""Deterministic resource naming and tagging.

``resolve`` turns an ``IdentityContext`` into resource name prefixes and a
canonical tag map. Given a context with both ``aws_region`` and
``aws_account_id`` set, it is a pure function: no clock, no randomness and
no I/O. Missing account or region values are looked up through an injected
``AmbientContextProvider`` and degrade to fixed defaults when that fails.
"""

# Standard Library
from typing import Dict, Iterable, Optional, Tuple

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.aws.ambient import AmbientContextProvider
from landing_zone.exceptions import AmbientLookupFailure
from landing_zone.naming import validation
from landing_zone.naming.data_classes import IdentityContext
from landing_zone.naming.models import ResolvedNaming, StateBackendNames
from landing_zone.naming.tables import (
    ENVIRONMENT_SHORT_CODES,
    LOCK_TABLE_SUFFIX,
    MANAGED_BY,
    NAME_RULES,
    REGION_FALLBACK_REPLACEMENTS,
    REGION_SHORT_CODES,
    STATE_SUFFIX,
)
from landing_zone.utils.enums import ResourceType

# Initialize logger
logger = Logger(service="naming-resolver")


def region_to_short(region: str) -> str:
    """Return the short code for an AWS region.

    Regions missing from the lookup table get their hyphens stripped and
    ``north``/``south`` abbreviated, e.g. ``me-south-1`` becomes ``mes1``.
    Different unlisted regions can map to the same code.
    """
    code = REGION_SHORT_CODES.get(region)
    if code is not None:
        return code

    code = region.replace("-", "")
    for word, abbreviation in REGION_FALLBACK_REPLACEMENTS:
        code = code.replace(word, abbreviation)
    return code


def env_to_short(environment: str) -> str:
    """Return the one-letter code for an environment name."""
    return ENVIRONMENT_SHORT_CODES[environment]


def compact_join(parts: Iterable[Optional[str]], separator: str = "-") -> str:
    """Join the non-empty ``parts`` with ``separator``."""
    return separator.join(part for part in parts if part)


def truncate(value: str, max_length: int) -> str:
    """Cut ``value`` to at most ``max_length`` characters."""
    return value[:max_length]


def resolve_ambient(
    ctx: IdentityContext,
    ambient: Optional[AmbientContextProvider] = None,
    default_region: Optional[str] = None,
) -> Tuple[str, str]:
    """Fill in the account id and region the context leaves unset.

    Parameters
    ----------
    ctx : IdentityContext
        The identity being resolved.
    ambient : Optional[AmbientContextProvider]
        Provider queried for missing values.
    default_region : Optional[str]
        Region used when neither the context nor the provider has one,
        defaults to ``LZ_DEFAULT_REGION``.

    Returns
    -------
    Tuple[str, str]
        The account id and the region.
    """
    fallback_region = default_region or config.DEFAULT_REGION

    account_id = ctx.aws_account_id
    if account_id is None:
        account_id = _lookup(ambient, "account_id", config.ZERO_ACCOUNT_ID)

    region = ctx.aws_region
    if region is None:
        region = _lookup(ambient, "region", fallback_region)

    return account_id, region


def _lookup(
    ambient: Optional[AmbientContextProvider], attribute: str, default: str
) -> str:
    if ambient is not None:
        try:
            return getattr(ambient, attribute)()
        except AmbientLookupFailure as e:
            logger.warning(
                f"Ambient {attribute} lookup failed, using default",
                extra={"default": default, "error": str(e)},
            )
            return default

    logger.warning(
        f"No ambient provider for {attribute}, using default",
        extra={"default": default},
    )
    return default


def build_tags(ctx: IdentityContext) -> Dict[str, str]:
    """Assemble the canonical tag map for ``ctx``.

    Optional tags are left out entirely when their source value is unset.
    """
    product_kind = validation.validate_product_kind(ctx.product_kind)
    tags = {
        "org:Name": ctx.org,
        f"{product_kind.value}:Id": ctx.product_moniker,
        "product:Environment": ctx.environment,
        "layer:Name": ctx.layer,
        "governance:SemanticVersion": ctx.semantic_version,
        "automation:ManagedBy": MANAGED_BY,
        "automation:Pipeline": ctx.pipeline,
        "cost:CostCenter": ctx.cost_center or ctx.org_moniker,
        "cost:Project": ctx.product,
    }

    if ctx.org_domain is not None:
        tags["org:Domain"] = ctx.org_domain
    if ctx.data_residency is not None:
        tags["org:DataResidency"] = ctx.data_residency

    return tags


def build_prefixes(
    ctx: IdentityContext, full_id: str, short_id: str
) -> Dict[str, str]:
    values = {
        "id": full_id,
        "id_short": short_id,
        "org_moniker": ctx.org_moniker,
        "product_moniker": ctx.product_moniker,
        "environment": ctx.environment,
    }

    prefixes = {}
    for resource_type, (template, max_length, lowercase) in NAME_RULES.items():
        name = template.format(**values)
        if lowercase:
            name = name.lower()
        prefixes[resource_type.value] = truncate(name, max_length)
    return prefixes


def build_state_names(prefixes: Dict[str, str]) -> StateBackendNames:
    def _with_suffix(resource_type: ResourceType, suffix: str) -> str:
        _, max_length, _ = NAME_RULES[resource_type]
        return truncate(prefixes[resource_type.value] + suffix, max_length)

    return StateBackendNames(
        bucket=_with_suffix(ResourceType.s3_bucket, STATE_SUFFIX),
        kms_alias=_with_suffix(ResourceType.kms_alias, STATE_SUFFIX),
        lock_table=_with_suffix(
            ResourceType.dynamodb_table, LOCK_TABLE_SUFFIX
        ),
    )


def resolve(
    ctx: IdentityContext,
    ambient: Optional[AmbientContextProvider] = None,
    default_region: Optional[str] = None,
) -> ResolvedNaming:
    """Resolve resource names and tags for an identity.

    Parameters
    ----------
    ctx : IdentityContext
        The identity to derive names from.
    ambient : Optional[AmbientContextProvider]
        Provider consulted only when ``ctx`` leaves the account id or the
        region unset.
    default_region : Optional[str]
        Region used when no region can be found at all.

    Returns
    -------
    ResolvedNaming
        The derived identifiers, name prefixes, state names and tags.

    Raises
    ------
    ValidationError
        If any field fails its format constraint.
    """
    validation.validate_non_empty("org", ctx.org)
    validation.validate_moniker("org_moniker", ctx.org_moniker)
    validation.validate_non_empty("product", ctx.product)
    validation.validate_moniker("product_moniker", ctx.product_moniker)
    validation.validate_environment(ctx.environment, ctx.environment_set)
    validation.validate_non_empty("layer", ctx.layer)
    validation.validate_semantic_version(ctx.semantic_version)
    validation.validate_product_kind(ctx.product_kind)
    if ctx.aws_region is not None:
        validation.validate_region(ctx.aws_region)
    if ctx.aws_account_id is not None:
        validation.validate_account_id(ctx.aws_account_id)

    account_id, region = resolve_ambient(ctx, ambient, default_region)
    validation.validate_region(region)
    validation.validate_account_id(account_id)

    region_code = region_to_short(region)
    environment_code = env_to_short(ctx.environment)

    full_id = compact_join(
        [ctx.org_moniker, ctx.product_moniker, ctx.environment, region_code]
    )
    short_id = compact_join(
        [ctx.org_moniker, ctx.product_moniker, environment_code, region_code]
    )

    prefixes = build_prefixes(ctx, full_id, short_id)

    return ResolvedNaming(
        id=full_id,
        id_short=short_id,
        region=region,
        region_code=region_code,
        environment=ctx.environment,
        environment_code=environment_code,
        account_id=account_id,
        prefixes=prefixes,
        state=build_state_names(prefixes),
        tags=build_tags(ctx),
    )
