"""Configuration for the landing zone toolkit.

This module reads environment variables for the project root, the fallback
region used when no region can be resolved, the environment set to validate
against and the Terraform binary to invoke.
"""

# Standard Library
import os

# Environment variables for configuration
PROJECT_ROOT = os.environ.get("LZ_PROJECT_ROOT", os.getcwd())
DEFAULT_REGION = os.environ.get("LZ_DEFAULT_REGION", "us-east-1")
ENVIRONMENT_SET = os.environ.get("LZ_ENVIRONMENT_SET", "stag")
TERRAFORM_BIN = os.environ.get("LZ_TERRAFORM_BIN", "terraform")
DEFAULT_PIPELINE = os.environ.get("LZ_DEFAULT_PIPELINE", "github-actions")

# Sentinel used when the account id cannot be looked up
ZERO_ACCOUNT_ID = "000000000000"
DEFAULT_SEMANTIC_VERSION = "0.1.0"

# Project file layout
COMMON_TFVARS_FILE = "common.auto.tfvars"
COMMON_TFVARS_TEMPLATE = "common.auto.tfvars.template"
ENV_TFVARS_FILE = "00-config.auto.tfvars"
BACKEND_CONFIG_FILE = "backend-config.hcl"
BACKEND_CONFIG_TEMPLATE = "backend-config.hcl.template"
BACKEND_TF_FILE = "backend.tf"
BACKEND_TF_DISABLED_FILE = "backend.tf.bak"
PLAN_FILE = "tfplan"
