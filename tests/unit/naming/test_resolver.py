"""Unit tests for the naming.resolver module."""

# Standard Library
import dataclasses

# Third Party
import pytest

# Local Modules
from landing_zone.aws.ambient import StaticAmbientProvider
from landing_zone.exceptions import ValidationError
from landing_zone.naming.data_classes import IdentityContext
from landing_zone.naming.resolver import (
    compact_join,
    env_to_short,
    region_to_short,
    resolve,
    truncate,
)
from landing_zone.naming.tables import NAME_RULES
from landing_zone.utils.enums import ProductKind, ResourceType


@pytest.fixture
def identity() -> IdentityContext:
    """Return a fully specified sandbox identity."""
    return IdentityContext(
        org="Dogfood",
        org_moniker="df",
        product="Unique Product",
        product_moniker="unique",
        environment="sbx",
        layer="bootstrap",
        semantic_version="1.2.3",
        aws_region="eu-central-2",
        aws_account_id="123456789012",
    )


def test_resolve_sandbox_identifiers(identity: IdentityContext):
    """Test the identifiers and prefixes of the reference sandbox identity."""
    naming = resolve(identity)

    assert naming.id == "df-unique-sbx-euc2"
    assert naming.id_short == "df-unique-x-euc2"
    assert naming.region_code == "euc2"
    assert naming.environment_code == "x"
    assert naming.prefix(ResourceType.s3_bucket) == "s3-df-unique-x-euc2"
    assert naming.prefix(ResourceType.kms_alias) == (
        "alias/kms-df-unique-sbx-euc2"
    )
    assert naming.prefix(ResourceType.log_group) == "/df/unique/sbx"


def test_resolve_state_backend_names(identity: IdentityContext):
    """Test the names of the remote state resources."""
    state = resolve(identity).state

    assert state.bucket == "s3-df-unique-x-euc2-tfstate"
    assert state.kms_alias == "alias/kms-df-unique-sbx-euc2-tfstate"
    assert state.lock_table == "dynamodb-df-unique-sbx-euc2-tfstate-lock"


def test_resolve_is_deterministic(identity: IdentityContext):
    """Test that resolving the same identity twice gives equal results."""
    assert resolve(identity) == resolve(identity)


def test_resolve_prefixes_respect_max_lengths():
    """Test that long identities are hard-truncated per resource type."""
    ctx = IdentityContext(
        org="Alphabet",
        org_moniker="abcdefghij",
        product="Letters",
        product_moniker="klmnopqrst",
        environment="prod",
        layer="compute",
        aws_region="ap-southeast-2",
        aws_account_id="123456789012",
    )

    naming = resolve(ctx)

    assert naming.id_short == "abcdefghij-klmnopqrst-p-apse2"
    assert naming.prefix(ResourceType.target_group) == (
        "tg-abcdefghij-klmnopqrst-p-a"
    )
    assert naming.prefix(ResourceType.alb) == (
        "alb-abcdefghij-klmnopqrst-p-apse"
    )
    for resource_type, (_, max_length, _) in NAME_RULES.items():
        assert len(naming.prefix(resource_type)) <= max_length


def test_resolve_required_tags(identity: IdentityContext):
    """Test the canonical tag map without optional values."""
    tags = resolve(identity).tags

    assert tags == {
        "org:Name": "Dogfood",
        "product:Id": "unique",
        "product:Environment": "sbx",
        "layer:Name": "bootstrap",
        "governance:SemanticVersion": "1.2.3",
        "automation:ManagedBy": "terraform",
        "automation:Pipeline": "github-actions",
        "cost:CostCenter": "df",
        "cost:Project": "Unique Product",
    }


def test_resolve_optional_tags_present_only_when_set(
    identity: IdentityContext,
):
    """Test that domain and residency tags appear only when configured."""
    ctx = dataclasses.replace(
        identity,
        org_domain="dogfood.example",
        data_residency="ch",
        cost_center="cc-42",
    )

    tags = resolve(ctx).tags

    assert tags["org:Domain"] == "dogfood.example"
    assert tags["org:DataResidency"] == "ch"
    assert tags["cost:CostCenter"] == "cc-42"


def test_resolve_client_kind_uses_client_tag(identity: IdentityContext):
    """Test that client identities get a client:Id tag."""
    ctx = dataclasses.replace(identity, product_kind=ProductKind.client)

    tags = resolve(ctx).tags

    assert tags["client:Id"] == "unique"
    assert "product:Id" not in tags


def test_resolve_uses_ambient_values_when_missing(
    identity: IdentityContext,
):
    """Test that unset account and region are taken from the provider."""
    ctx = dataclasses.replace(identity, aws_region=None, aws_account_id=None)
    ambient = StaticAmbientProvider(
        account_id="111122223333", region="eu-west-1"
    )

    naming = resolve(ctx, ambient)

    assert naming.account_id == "111122223333"
    assert naming.region == "eu-west-1"
    assert naming.id == "df-unique-sbx-euw1"


def test_resolve_falls_back_when_ambient_lookup_fails(
    identity: IdentityContext,
):
    """Test the zero account and default region fallbacks."""
    ctx = dataclasses.replace(identity, aws_region=None, aws_account_id=None)

    naming = resolve(ctx, StaticAmbientProvider(), default_region="us-west-2")

    assert naming.account_id == "000000000000"
    assert naming.region == "us-west-2"
    assert naming.region_code == "usw2"


def test_resolve_falls_back_without_provider(identity: IdentityContext):
    """Test fallbacks when no ambient provider is given at all."""
    ctx = dataclasses.replace(identity, aws_account_id=None)

    naming = resolve(ctx)

    assert naming.account_id == "000000000000"
    assert naming.region == "eu-central-2"


def test_resolve_ignores_provider_when_context_complete(
    identity: IdentityContext,
):
    """Test that explicit values win over the ambient provider."""
    ambient = StaticAmbientProvider(
        account_id="999999999999", region="us-east-1"
    )

    naming = resolve(identity, ambient)

    assert naming.account_id == "123456789012"
    assert naming.region == "eu-central-2"


@pytest.mark.parametrize(
    "field_name, value",
    [
        ("org_moniker", "d"),
        ("product_moniker", "Unique"),
        ("environment", "qa"),
        ("aws_region", "europe"),
        ("aws_account_id", "12345"),
        ("semantic_version", "1.2"),
        ("layer", ""),
        ("org_moniker", "df\n"),
        ("aws_region", "eu-central-2\n"),
        ("aws_account_id", "123456789012\n"),
        ("aws_account_id", "\uff11" * 12),
        ("semantic_version", "1.2.3\n"),
    ],
)
def test_resolve_rejects_invalid_fields(
    identity: IdentityContext, field_name: str, value: str
):
    """Test that invalid fields raise a ValidationError naming the field."""
    ctx = dataclasses.replace(identity, **{field_name: value})

    with pytest.raises(ValidationError) as exc_info:
        resolve(ctx)

    assert exc_info.value.field == field_name
    assert exc_info.value.value == value


def test_resolve_test_environment_set(identity: IdentityContext):
    """Test that the test environment is only valid in the test set."""
    ctx = dataclasses.replace(identity, environment="test")

    with pytest.raises(ValidationError):
        resolve(ctx)

    naming = resolve(dataclasses.replace(ctx, environment_set="test"))
    assert naming.id_short == "df-unique-t-euc2"


@pytest.mark.parametrize(
    "region, expected",
    [
        ("eu-central-2", "euc2"),
        ("eu-north-1", "eun1"),
        ("us-east-1", "use1"),
        ("sa-east-1", "sae1"),
        ("me-south-1", "mes1"),
        ("ap-northeast-3", "apneast3"),
        ("il-central-1", "ilcentral1"),
    ],
)
def test_region_to_short(region: str, expected: str):
    """Test listed regions and the lossy fallback for unlisted ones."""
    assert region_to_short(region) == expected


def test_env_to_short():
    """Test the one-letter environment codes."""
    environments = ("prod", "stag", "test", "dev", "sbx")

    assert [env_to_short(e) for e in environments] == ["p", "s", "t", "d", "x"]


def test_compact_join_drops_empty_parts():
    """Test that empty and None parts are skipped."""
    assert compact_join(["df", "", None, "sbx"]) == "df-sbx"


def test_truncate():
    """Test hard truncation."""
    assert truncate("abcdef", 4) == "abcd"
    assert truncate("abc", 4) == "abc"
