"""Format checks for identity fields.

Every check raises ``ValidationError`` naming the offending field and the
constraint it violated. Nothing is normalized or corrected here.
"""

# Standard Library
import re
from typing import Optional, Tuple

# Local Modules
from landing_zone.exceptions import ValidationError
from landing_zone.naming.tables import ENVIRONMENT_SETS
from landing_zone.utils.enums import ProductKind

MONIKER_MIN_LENGTH = 2
MONIKER_MAX_LENGTH = 10

MONIKER_PATTERN = re.compile(r"^[a-z](?:[a-z0-9]|-(?=[a-z0-9]))*[a-z0-9]$")
ACCOUNT_ID_PATTERN = re.compile(r"^[0-9]{12}$")
REGION_PATTERN = re.compile(r"^[a-z]{2}(?:-gov|-iso[a-z]?)?-[a-z]+-[0-9]+$")
SEMVER_PATTERN = re.compile(
    r"^(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-((?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def validate_moniker(field_name: str, value: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(field_name, value, "must be a string")
    if not MONIKER_MIN_LENGTH <= len(value) <= MONIKER_MAX_LENGTH:
        raise ValidationError(
            field_name,
            value,
            f"length must be between {MONIKER_MIN_LENGTH} and "
            f"{MONIKER_MAX_LENGTH} characters",
        )
    if not MONIKER_PATTERN.fullmatch(value):
        raise ValidationError(
            field_name,
            value,
            "must be lowercase alphanumeric with single hyphens, start with "
            "a letter and end with a letter or digit",
        )
    return value


def environment_choices(environment_set: str) -> Tuple[str, ...]:
    try:
        return ENVIRONMENT_SETS[environment_set]
    except KeyError:
        raise ValidationError(
            "environment_set",
            environment_set,
            "must be one of: " + ", ".join(sorted(ENVIRONMENT_SETS)),
        ) from None


def validate_environment(value: str, environment_set: str) -> str:
    choices = environment_choices(environment_set)
    if value not in choices:
        raise ValidationError(
            "environment", value, "must be one of: " + ", ".join(choices)
        )
    return value


def validate_region(value: Optional[str]) -> str:
    if not isinstance(value, str) or not REGION_PATTERN.fullmatch(value):
        raise ValidationError(
            "aws_region", value, "must look like an AWS region, e.g. eu-west-1"
        )
    return value


def validate_account_id(value: Optional[str]) -> str:
    if not isinstance(value, str) or not ACCOUNT_ID_PATTERN.fullmatch(value):
        raise ValidationError(
            "aws_account_id", value, "must be exactly 12 digits"
        )
    return value


def validate_semantic_version(value: str) -> str:
    if not isinstance(value, str) or not SEMVER_PATTERN.fullmatch(value):
        raise ValidationError(
            "semantic_version", value, "must be a semantic version"
        )
    return value


def validate_non_empty(field_name: str, value: Optional[str]) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field_name, value, "must be a non-empty string")
    return value


def validate_product_kind(value) -> ProductKind:
    try:
        return ProductKind(value)
    except ValueError:
        raise ValidationError(
            "product_kind",
            value,
            "must be one of: " + ", ".join(k.value for k in ProductKind),
        ) from None
