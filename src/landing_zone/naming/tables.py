"""Lookup tables used by the naming resolver."""

# Standard Library
from typing import Dict, Tuple

# Local Modules
from landing_zone.utils.enums import ResourceType

REGION_SHORT_CODES: Dict[str, str] = {
    "eu-central-1": "euc1",
    "eu-central-2": "euc2",
    "eu-west-1": "euw1",
    "eu-west-2": "euw2",
    "eu-west-3": "euw3",
    "eu-north-1": "eun1",
    "eu-south-1": "eus1",
    "us-east-1": "use1",
    "us-east-2": "use2",
    "us-west-1": "usw1",
    "us-west-2": "usw2",
    "ap-southeast-1": "apse1",
    "ap-southeast-2": "apse2",
    "ap-northeast-1": "apne1",
    "ap-northeast-2": "apne2",
    "ca-central-1": "cac1",
    "sa-east-1": "sae1",
}

# Applied in order to unlisted regions after hyphens are stripped
REGION_FALLBACK_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("north", "n"),
    ("south", "s"),
)

ENVIRONMENT_SHORT_CODES: Dict[str, str] = {
    "prod": "p",
    "stag": "s",
    "test": "t",
    "dev": "d",
    "sbx": "x",
}

# Both sets exist across deployments; one is chosen per deployment
ENVIRONMENT_SETS: Dict[str, Tuple[str, ...]] = {
    "stag": ("prod", "stag", "dev", "sbx"),
    "test": ("dev", "test", "prod", "sbx"),
}

# resource type -> (template, max length, force lowercase)
NAME_RULES: Dict[ResourceType, Tuple[str, int, bool]] = {
    ResourceType.s3_bucket: ("s3-{id_short}", 63, True),
    ResourceType.kms_alias: ("alias/kms-{id}", 256, False),
    ResourceType.dynamodb_table: ("dynamodb-{id}", 255, False),
    # AWS allows 64; 50 leaves room for role suffixes
    ResourceType.iam_role: ("role-{id}", 50, False),
    ResourceType.iam_policy: ("policy-{id}", 128, False),
    ResourceType.eks_cluster: ("eks-{id}", 100, False),
    ResourceType.rds_cluster: ("rds-{id}", 63, True),
    ResourceType.ecr_repository: ("ecr-{id}", 256, True),
    ResourceType.alb: ("alb-{id_short}", 32, False),
    ResourceType.nlb: ("nlb-{id_short}", 32, False),
    ResourceType.target_group: ("tg-{id_short}", 28, False),
    ResourceType.security_group: ("sg-{id}", 255, False),
    ResourceType.vpc: ("vpc-{id}", 255, False),
    ResourceType.lambda_function: ("lambda-{id}", 64, False),
    ResourceType.sqs_queue: ("sqs-{id}", 80, False),
    ResourceType.sns_topic: ("sns-{id}", 256, False),
    ResourceType.secret: ("secret-{id}", 512, False),
    ResourceType.log_group: (
        "/{org_moniker}/{product_moniker}/{environment}",
        512,
        False,
    ),
}

STATE_SUFFIX = "-tfstate"
LOCK_TABLE_SUFFIX = "-tfstate-lock"

MANAGED_BY = "terraform"
