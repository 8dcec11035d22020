"""Command line entry point, ``lz``."""

# Standard Library
import json
from pathlib import Path
from typing import Optional

# Third Party
import click
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.aws.ambient import Boto3AmbientProvider
from landing_zone.bootstrap.layers import (
    BOOTSTRAP_LAYER,
    resolve_layer_directory,
)
from landing_zone.bootstrap.orchestrator import (
    BootstrapOptions,
    BootstrapOrchestrator,
)
from landing_zone.bootstrap.project import load_identity
from landing_zone.bootstrap.terraform import TerraformCli
from landing_zone.bootstrap.validator import validate_backend_configs
from landing_zone.exceptions import ConfigurationError, LandingZoneError
from landing_zone.naming.resolver import resolve
from landing_zone.naming.tables import ENVIRONMENT_SETS

# Initialize logger
logger = Logger(service="lz-cli")

project_root_option = click.option(
    "--project-root",
    "project_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root with common.auto.tfvars, defaults to LZ_PROJECT_ROOT.",
)
environment_set_option = click.option(
    "--environment-set",
    "environment_set",
    type=click.Choice(sorted(ENVIRONMENT_SETS)),
    default=None,
    help="Allowed environment set, defaults to LZ_ENVIRONMENT_SET.",
)


def _project_root(project_root: Optional[Path]) -> Path:
    return Path(project_root or config.PROJECT_ROOT).resolve()


def _fail(error: LandingZoneError) -> None:
    click.secho(f"Error: {error}", fg="red", err=True)
    raise SystemExit(1)


@click.group()
def main() -> None:
    """Landing zone naming and remote-state bootstrap."""


@main.command()
@click.argument("environment", default="dev")
@click.option(
    "--auto-approve", is_flag=True, help="Skip interactive confirmations."
)
@click.option(
    "--skip-plan", is_flag=True, help="Apply without a saved plan."
)
@click.option(
    "--connect-only",
    is_flag=True,
    help="Attach to an existing backend; implies --skip-plan.",
)
@project_root_option
@environment_set_option
def bootstrap(
    environment: str,
    auto_approve: bool,
    skip_plan: bool,
    connect_only: bool,
    project_root: Optional[Path],
    environment_set: Optional[str],
) -> None:
    """Deploy the bootstrap layer and configure every layer's backend."""
    root = _project_root(project_root)
    options = BootstrapOptions(
        auto_approve=auto_approve,
        skip_plan=skip_plan,
        connect_only=connect_only,
    )

    click.secho(f"Bootstrap layer for environment: {environment}", fg="blue")
    if options.connect_only:
        click.secho(
            "Connect-only mode: attaching to existing infrastructure",
            fg="yellow",
        )

    try:
        identity = load_identity(
            root, environment, BOOTSTRAP_LAYER.name, environment_set
        )
        terraform = TerraformCli(
            root / BOOTSTRAP_LAYER.directory / "terraform"
        )
        if not terraform.is_available():
            raise ConfigurationError(
                f"Terraform binary '{terraform.binary}' not found on PATH"
            )

        orchestrator = BootstrapOrchestrator(
            project_root=root,
            identity=identity,
            backend_client=terraform,
            ambient=Boto3AmbientProvider(region_name=identity.aws_region),
            options=options,
            confirm=lambda prompt: click.confirm(prompt, default=False),
        )
        result = orchestrator.run()
    except LandingZoneError as e:
        logger.error(f"Bootstrap failed: {e}")
        _fail(e)

    click.secho("Bootstrap layer deployment complete", fg="green")
    click.echo(f"  Phases: {' -> '.join(p.value for p in result.phases)}")
    click.echo(f"  Bucket: {result.backend.bucket}")
    click.echo(f"  Region: {result.backend.region}")
    click.echo(f"  KMS key: {result.backend.kms_key_id}")
    click.echo(
        f"  Backend configs updated: {result.updated_count}, "
        f"skipped: {result.skipped_count}"
    )
    for warning in result.warnings:
        click.secho(f"Warning: {warning}", fg="yellow")


@main.command("validate-backends")
@click.argument("environment", default="sbx")
@project_root_option
def validate_backends(environment: str, project_root: Optional[Path]) -> None:
    """Check every layer's backend-config file for ENVIRONMENT."""
    try:
        report = validate_backend_configs(
            _project_root(project_root), environment
        )
    except LandingZoneError as e:
        _fail(e)

    for layer in report.layers:
        if not layer.exists:
            click.secho(f"MISSING  {layer.directory}: {layer.path}", fg="red")
        elif layer.errors:
            click.secho(f"INVALID  {layer.directory}", fg="red")
            for error in layer.errors:
                click.echo(f"   - {error}")
        else:
            click.secho(f"VALID    {layer.directory}", fg="green")

    click.echo(
        f"Valid: {report.valid_count}, Invalid: {report.invalid_count}, "
        f"Missing: {report.missing_count}"
    )
    if not report.ok:
        raise SystemExit(1)


@main.command()
@click.argument("environment")
@click.option(
    "--layer", "layer", default=BOOTSTRAP_LAYER.name, help="Layer name."
)
@click.option(
    "--offline",
    is_flag=True,
    help="Do not query AWS for missing account or region values.",
)
@project_root_option
@environment_set_option
def naming(
    environment: str,
    layer: str,
    offline: bool,
    project_root: Optional[Path],
    environment_set: Optional[str],
) -> None:
    """Print the resolved names and tags for ENVIRONMENT as JSON."""
    root = _project_root(project_root)
    try:
        directory = resolve_layer_directory(layer, root)
        identity = load_identity(root, environment, layer, environment_set)
        ambient = (
            None
            if offline
            else Boto3AmbientProvider(region_name=identity.aws_region)
        )
        resolved = resolve(identity, ambient)
    except LandingZoneError as e:
        _fail(e)

    payload = resolved.model_dump()
    payload["layer_directory"] = directory
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
