# Standard Library
from enum import Enum


class BootstrapPhase(str, Enum):
    """Enumeration of bootstrap orchestrator phases.

    Attributes:
        probing_remote: Detecting whether remote state already exists.
        local_bootstrap: Initializing Terraform with a local state store.
        applying: Planning and applying the state backend resources.
        generating_configs: Writing backend-config files for every layer.
        migrating_state: Moving local state into the remote backend.
        verifying: Checking that remote state can be listed.
        done: The run finished.
    """

    probing_remote = "probing_remote"
    local_bootstrap = "local_bootstrap"
    applying = "applying"
    generating_configs = "generating_configs"
    migrating_state = "migrating_state"
    verifying = "verifying"
    done = "done"


class ProductKind(str, Enum):
    """Enumeration of the terminology used for the second naming segment.

    Attributes:
        product: Names and tags use ``product`` (``product:Id``).
        client: Names and tags use ``client`` (``client:Id``).
    """

    product = "product"
    client = "client"


class ResourceType(str, Enum):
    """Enumeration of resource types with a derived name prefix."""

    s3_bucket = "s3_bucket"
    kms_alias = "kms_alias"
    dynamodb_table = "dynamodb_table"
    iam_role = "iam_role"
    iam_policy = "iam_policy"
    eks_cluster = "eks_cluster"
    rds_cluster = "rds_cluster"
    ecr_repository = "ecr_repository"
    alb = "alb"
    nlb = "nlb"
    target_group = "target_group"
    security_group = "security_group"
    vpc = "vpc"
    lambda_function = "lambda_function"
    sqs_queue = "sqs_queue"
    sns_topic = "sns_topic"
    secret = "secret"
    log_group = "log_group"
