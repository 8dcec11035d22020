"""Unit tests for the bootstrap.terraform module."""

# Standard Library
import subprocess
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

# Third Party
import pytest

# Local Modules
from landing_zone.bootstrap.terraform import TerraformCli
from landing_zone.exceptions import CommandError


def completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def mock_run() -> Generator[MagicMock, None, None]:
    """Mock subprocess.run inside the terraform module."""
    with patch("landing_zone.bootstrap.terraform.subprocess.run") as run:
        run.return_value = completed()
        yield run


@pytest.fixture
def cli(tmp_path: Path) -> TerraformCli:
    return TerraformCli(tmp_path, binary="terraform")


def test_init_with_backend_config(cli: TerraformCli, mock_run: MagicMock):
    """Test the init command line against a backend."""
    cli.init(
        backend_config=Path("environments/sbx/backend-config.hcl"),
        reconfigure=True,
        quiet=True,
    )

    args, kwargs = mock_run.call_args
    assert args[0] == [
        "terraform",
        "init",
        "-backend-config=environments/sbx/backend-config.hcl",
        "-reconfigure",
        "-input=false",
    ]
    assert kwargs["cwd"] == str(cli.working_dir)
    assert kwargs["capture_output"] is True
    assert kwargs["check"] is False


def test_init_local(cli: TerraformCli, mock_run: MagicMock):
    """Test a plain init streams output."""
    cli.init()

    args, kwargs = mock_run.call_args
    assert args[0] == ["terraform", "init"]
    assert kwargs["capture_output"] is False


def test_state_list(cli: TerraformCli, mock_run: MagicMock):
    """Test that state addresses are split into lines."""
    mock_run.return_value = completed(
        stdout="aws_s3_bucket.state\n\naws_kms_key.state\n"
    )

    assert cli.state_list() == ["aws_s3_bucket.state", "aws_kms_key.state"]


def test_plan_and_apply(cli: TerraformCli, mock_run: MagicMock):
    """Test plan, saved-plan apply and direct apply command lines."""
    var_files = ["../../common.auto.tfvars", "environments/sbx/00.tfvars"]

    cli.plan(var_files, out="tfplan")
    cli.apply(plan_file="tfplan")
    cli.apply(var_files=var_files, auto_approve=True)

    commands = [call.args[0] for call in mock_run.call_args_list]
    assert commands == [
        [
            "terraform",
            "plan",
            "-var-file=../../common.auto.tfvars",
            "-var-file=environments/sbx/00.tfvars",
            "-out=tfplan",
        ],
        ["terraform", "apply", "tfplan"],
        [
            "terraform",
            "apply",
            "-var-file=../../common.auto.tfvars",
            "-var-file=environments/sbx/00.tfvars",
            "-auto-approve",
        ],
    ]


def test_migrate_state(cli: TerraformCli, mock_run: MagicMock):
    """Test the state migration command line."""
    cli.migrate_state(Path("environments/sbx/backend-config.hcl"))

    assert mock_run.call_args.args[0] == [
        "terraform",
        "init",
        "-migrate-state",
        "-backend-config=environments/sbx/backend-config.hcl",
    ]


def test_output_raw(cli: TerraformCli, mock_run: MagicMock):
    """Test that raw outputs are stripped."""
    mock_run.return_value = completed(stdout="s3-state-bucket\n")

    assert cli.output_raw("s3_bucket_name") == "s3-state-bucket"
    assert mock_run.call_args.args[0] == [
        "terraform",
        "output",
        "-raw",
        "s3_bucket_name",
    ]


def test_non_zero_exit_raises(cli: TerraformCli, mock_run: MagicMock):
    """Test that failures raise CommandError with the stderr tail."""
    mock_run.return_value = completed(returncode=1, stderr="Error: no state")

    with pytest.raises(CommandError) as exc_info:
        cli.state_list()

    assert exc_info.value.return_code == 1
    assert exc_info.value.command == "terraform state list"
    assert exc_info.value.stderr == "Error: no state"


def test_missing_binary_raises(cli: TerraformCli, mock_run: MagicMock):
    """Test that a missing executable raises CommandError 127."""
    mock_run.side_effect = FileNotFoundError("terraform")

    with pytest.raises(CommandError) as exc_info:
        cli.init()

    assert exc_info.value.return_code == 127


def test_is_available(tmp_path: Path):
    """Test the PATH lookup for the binary."""
    with patch(
        "landing_zone.bootstrap.terraform.shutil.which", return_value=None
    ):
        assert TerraformCli(tmp_path).is_available() is False
    with patch(
        "landing_zone.bootstrap.terraform.shutil.which",
        return_value="/usr/bin/terraform",
    ):
        assert TerraformCli(tmp_path).is_available() is True
