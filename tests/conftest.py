# Standard Library
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

# Third Party
import pytest
from moto import mock_aws

# Local Modules
from landing_zone.bootstrap.terraform import StateBackendClient
from landing_zone.exceptions import CommandError

BACKEND_TEMPLATE = """bucket       = "{{BUCKET}}"
key          = "{{KEY}}"
region       = "{{REGION}}"
encrypt      = true
kms_key_id   = "{{KMS_ALIAS}}"
use_lockfile = true
# environment: {{ENV}}
"""

COMMON_TFVARS = """# Shared identity for every layer
aws_region       = "eu-central-2"
org              = "Dogfood"
org_moniker      = "df"
product          = "Unique Product"
product_moniker  = "unique"
semantic_version = "1.2.3"
aws_account_id   = "123456789012"
"""

LAYER_DIRS = (
    "01-bootstrap",
    "02-governance",
    "03-infrastructure",
    "04-data-and-ai",
    "05-compute",
    "06-applications",
)

STATE_BUCKET = "s3-df-unique-x-euc2-tfstate"
KMS_ALIAS = "alias/kms-df-unique-sbx-euc2-tfstate"
KMS_ARN = (
    "arn:aws:kms:eu-central-2:123456789012:"
    "key/1234abcd-12ab-34cd-56ef-1234567890ab"
)


@pytest.fixture(scope="session")
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(scope="function")
def mocked_aws(aws_credentials):
    """
    Mocked AWS services using moto for testing.
    Every boto3 client created inside a test using this fixture is mocked.
    """
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def project_tree(tmp_path: Path) -> Path:
    """
    Create a landing zone project with all six layers on disk.
    Every layer has a backend-config template; only the bootstrap layer has
    a backend.tf and an sbx environment config.
    """
    (tmp_path / "common.auto.tfvars").write_text(COMMON_TFVARS)

    for directory in LAYER_DIRS:
        terraform_dir = tmp_path / directory / "terraform"
        terraform_dir.mkdir(parents=True)
        (terraform_dir / "backend-config.hcl.template").write_text(
            BACKEND_TEMPLATE
        )

    bootstrap_dir = tmp_path / "01-bootstrap" / "terraform"
    (bootstrap_dir / "backend.tf").write_text(
        'terraform {\n  backend "s3" {}\n}\n'
    )
    env_dir = bootstrap_dir / "environments" / "sbx"
    env_dir.mkdir(parents=True)
    (env_dir / "00-config.auto.tfvars").write_text('environment = "sbx"\n')

    return tmp_path


class FakeBackendClient(StateBackendClient):
    """
    In-memory stand-in for the Terraform CLI.
    Remote state becomes reachable once state has been migrated, or
    immediately when constructed with ``remote=True``.
    """

    def __init__(
        self,
        remote: bool = False,
        outputs: Optional[dict] = None,
        fail_on: Sequence[str] = (),
    ) -> None:
        self.remote = remote
        self.outputs = (
            outputs
            if outputs is not None
            else {
                "s3_bucket_name": STATE_BUCKET,
                "kms_key_alias": KMS_ALIAS,
                "aws_region": "eu-central-2",
            }
        )
        self.fail_on = set(fail_on)
        self.calls: List[tuple] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise CommandError(f"terraform {name}", 1, "simulated failure")

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def init(self, backend_config=None, reconfigure=False, quiet=False):
        self._record("init", backend_config, reconfigure, quiet)

    def state_list(self):
        self._record("state_list")
        if not self.remote:
            raise CommandError("terraform state list", 1, "no state")
        return ["aws_s3_bucket.state"]

    def plan(self, var_files, out):
        self._record("plan", tuple(var_files), out)

    def apply(self, plan_file=None, var_files=(), auto_approve=False):
        self._record("apply", plan_file, tuple(var_files), auto_approve)

    def migrate_state(self, backend_config):
        self._record("migrate_state", backend_config)
        self.remote = True

    def output_raw(self, name):
        self._record("output_raw", name)
        return self.outputs.get(name, "")


@pytest.fixture(scope="function")
def fake_backend() -> FakeBackendClient:
    """A fresh Terraform stand-in with no remote state yet."""
    return FakeBackendClient()


@pytest.fixture(scope="function")
def backend_factory():
    """Build Terraform stand-ins with custom remote state or failures."""
    return FakeBackendClient


def pytest_configure(config):
    """
    Configure pytest to add the src directory to sys.path for module imports.
    This allows importing modules from the src directory in tests.
    """
    # Get the absolute path to the project root
    project_root = Path(__file__).parent.parent

    # Add the src directory to sys.path
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))

    return config
