"""Staged, re-runnable bootstrap of the remote Terraform state backend.

The bootstrap layer creates the bucket and key that hold every layer's
remote state, so its first apply has to run with local state. The
orchestrator detects which situation it is in and walks one of two paths::

    probing_remote -> local_bootstrap -> applying -> generating_configs
                   -> migrating_state -> verifying -> done

    probing_remote -> generating_configs -> verifying -> done

The second path is taken whenever remote state is already reachable (or
``connect_only`` is set), so re-running against a bootstrapped environment
never creates resources or migrates state again. Backend-config files are
rewritten on both paths.
"""

# Standard Library
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

# Third Party
import pydantic
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.aws.ambient import (
    AmbientContextProvider,
    resolve_kms_key_arn,
)
from landing_zone.bootstrap.backend_config import (
    BackendConfig,
    existing_bucket,
    read_backend_values,
    write_backend_config,
)
from landing_zone.bootstrap.layers import (
    BOOTSTRAP_LAYER,
    backend_config_path,
    backend_template_path,
    discover_layer_dirs,
    environment_tfvars_path,
    state_key_for,
)
from landing_zone.bootstrap.terraform import StateBackendClient
from landing_zone.exceptions import (
    AmbientLookupFailure,
    BackendProbeFailure,
    CommandError,
    ConfigurationError,
    PhaseFailure,
    VerificationWarning,
)
from landing_zone.naming.data_classes import IdentityContext
from landing_zone.naming.models import ResolvedNaming
from landing_zone.naming.resolver import resolve
from landing_zone.utils.enums import BootstrapPhase

# Initialize logger
logger = Logger(service="bootstrap-orchestrator")

ConfirmCallback = Callable[[str], bool]


@dataclass
class BootstrapOptions:
    """Operator choices for a bootstrap run.

    Attributes
    ----------
        auto_approve : bool
            Skip interactive confirmations.
        skip_plan : bool
            Apply without a saved plan.
        connect_only : bool
            Attach to existing remote state; implies ``skip_plan``.
    """

    auto_approve: bool = field(
        default=False,
        metadata={"description": "Skip interactive confirmations."},
    )
    skip_plan: bool = field(
        default=False,
        metadata={"description": "Apply without a saved plan."},
    )
    connect_only: bool = field(
        default=False,
        metadata={"description": "Attach to existing remote state."},
    )

    def __post_init__(self) -> None:
        if self.connect_only:
            self.skip_plan = True


@dataclass
class BootstrapState:
    """Run-time state of a single bootstrap run."""

    remote_state_detected: bool = False
    phase: BootstrapPhase = BootstrapPhase.probing_remote
    history: List[BootstrapPhase] = field(default_factory=list)

    def enter(self, phase: BootstrapPhase) -> None:
        self.phase = phase
        self.history.append(phase)


@dataclass
class BootstrapResult:
    """Outcome of a completed bootstrap run."""

    environment: str
    remote_state_detected: bool
    phases: List[BootstrapPhase]
    backend: BackendConfig
    updated_count: int
    skipped_count: int
    verified: bool
    warnings: List[VerificationWarning] = field(default_factory=list)


class BootstrapOrchestrator:
    """Runs the bootstrap layer and writes every layer's backend config."""

    def __init__(
        self,
        project_root: Union[str, Path],
        identity: IdentityContext,
        backend_client: StateBackendClient,
        ambient: Optional[AmbientContextProvider] = None,
        options: Optional[BootstrapOptions] = None,
        confirm: Optional[ConfirmCallback] = None,
        default_region: Optional[str] = None,
    ) -> None:
        """Initialize the orchestrator.

        Parameters
        ----------
        project_root : Union[str, Path]
            Directory containing ``common.auto.tfvars`` and the numbered
            layer directories.
        identity : IdentityContext
            Identity of the bootstrap layer; its environment is the one
            being bootstrapped.
        backend_client : StateBackendClient
            Client running Terraform in the bootstrap terraform directory.
        ambient : Optional[AmbientContextProvider]
            Provider for credentials checks and KMS ARN lookups. Without
            one, KMS aliases are written verbatim.
        options : Optional[BootstrapOptions]
            Operator choices, defaults to interactive planning.
        confirm : Optional[ConfirmCallback]
            Called with a prompt before apply and migration unless
            ``auto_approve`` is set. Without one, those steps are refused.
        default_region : Optional[str]
            Region used by the naming resolver when none can be found.
        """
        self.project_root = Path(project_root)
        self.identity = identity
        self.environment = identity.environment
        self.backend = backend_client
        self.ambient = ambient
        self.options = options or BootstrapOptions()
        self.confirm = confirm
        self.default_region = default_region

        self.terraform_dir = (
            self.project_root / BOOTSTRAP_LAYER.directory / "terraform"
        )
        # Relative to terraform_dir, which is where Terraform runs
        self.backend_config_arg = (
            Path("environments")
            / self.environment
            / config.BACKEND_CONFIG_FILE
        )
        self.backend_config_file = backend_config_path(
            self.terraform_dir, self.environment
        )
        self.backend_tf = self.terraform_dir / config.BACKEND_TF_FILE
        self.backend_tf_disabled = (
            self.terraform_dir / config.BACKEND_TF_DISABLED_FILE
        )
        self.var_files = [
            f"../../{config.COMMON_TFVARS_FILE}",
            f"environments/{self.environment}/{config.ENV_TFVARS_FILE}",
        ]

    # region Preflight
    def preflight(self) -> None:
        """Check the project layout and credentials before any phase.

        Raises
        ------
        ConfigurationError
            If a required directory or file is missing, or the caller
            identity cannot be resolved.
        """
        if not self.terraform_dir.is_dir():
            raise ConfigurationError(
                f"Terraform directory not found: {self.terraform_dir}"
            )

        common_tfvars = self.project_root / config.COMMON_TFVARS_FILE
        if not common_tfvars.is_file():
            raise ConfigurationError(
                f"{config.COMMON_TFVARS_FILE} not found: {common_tfvars}"
            )

        env_tfvars = environment_tfvars_path(
            self.terraform_dir, self.environment
        )
        if not env_tfvars.is_file():
            raise ConfigurationError(f"Config file not found: {env_tfvars}")

        if self.ambient is not None:
            try:
                account = self.ambient.account_id()
                caller = self.ambient.caller_arn()
            except AmbientLookupFailure as e:
                raise ConfigurationError(
                    f"AWS credentials not configured: {e}"
                ) from e
            logger.info(
                "AWS credentials valid",
                extra={"account": account, "identity": caller},
            )

    # endregion

    def run(self) -> BootstrapResult:
        """Execute the bootstrap.

        Returns
        -------
        BootstrapResult
            Visited phases, the bootstrap backend config and file counts.

        Raises
        ------
        ValidationError
            If the identity fails naming validation.
        ConfigurationError
            If preflight checks fail.
        PhaseFailure
            If any phase fails; the run stops at that phase.
        """
        naming = resolve(self.identity, self.ambient, self.default_region)
        self.preflight()

        state = BootstrapState()
        logger.info(
            "Deploying bootstrap layer",
            extra={
                "environment": self.environment,
                "terraform_dir": str(self.terraform_dir),
                "connect_only": self.options.connect_only,
            },
        )

        with self._phase(state, BootstrapPhase.probing_remote):
            remote = self._probe_remote()
            if self.options.connect_only and not remote:
                logger.warning(
                    "Connect-only mode but existing state not detected, "
                    "assuming remote state"
                )
            remote = remote or self.options.connect_only
            state.remote_state_detected = remote

            if (
                self.options.connect_only
                and not self.backend_config_file.is_file()
            ):
                self._synthesize_backend_config(naming)

            if remote:
                self._attach_remote()

        if not remote:
            with self._phase(state, BootstrapPhase.local_bootstrap):
                self._init_local()

            with self._phase(state, BootstrapPhase.applying):
                self._apply()

        with self._phase(state, BootstrapPhase.generating_configs):
            backend = self._collect_backend(remote)
            write_backend_config(
                backend_template_path(self.terraform_dir),
                self.backend_config_file,
                backend,
            )
            updated, skipped = self._generate_layer_configs(backend, naming)

        if not remote:
            with self._phase(state, BootstrapPhase.migrating_state):
                self._migrate_state()

        with self._phase(state, BootstrapPhase.verifying):
            warnings = self._verify()

        state.enter(BootstrapPhase.done)
        logger.info(
            "Bootstrap complete",
            extra={
                "phases": [phase.value for phase in state.history],
                "updated": updated,
                "skipped": skipped,
            },
        )

        return BootstrapResult(
            environment=self.environment,
            remote_state_detected=state.remote_state_detected,
            phases=list(state.history),
            backend=backend,
            updated_count=updated,
            skipped_count=skipped,
            verified=not warnings,
            warnings=warnings,
        )

    @contextmanager
    def _phase(
        self, state: BootstrapState, phase: BootstrapPhase
    ) -> Iterator[None]:
        state.enter(phase)
        logger.info(f"Entering phase {phase.value}")
        try:
            yield
        except PhaseFailure:
            raise
        except (
            CommandError,
            ConfigurationError,
            pydantic.ValidationError,
            OSError,
        ) as e:
            logger.error(f"Phase {phase.value} failed: {e}")
            raise PhaseFailure(phase, str(e)) from e

    def _ask(self, phase: BootstrapPhase, prompt: str) -> None:
        if self.options.auto_approve:
            return
        if self.confirm is None or not self.confirm(prompt):
            raise PhaseFailure(phase, "Cancelled by operator")

    # region Probing
    def _probe_remote(self) -> bool:
        try:
            self._check_remote_state()
        except BackendProbeFailure as e:
            logger.info(
                "State is local or does not exist",
                extra={"reason": str(e)},
            )
            return False

        logger.info("State is already in the remote backend")
        return True

    def _check_remote_state(self) -> None:
        if not self.backend_tf.is_file():
            raise BackendProbeFailure(f"{self.backend_tf} not found")
        if not existing_bucket(self.backend_config_file):
            raise BackendProbeFailure(
                f"No bucket configured in {self.backend_config_file}"
            )
        try:
            self.backend.init(
                backend_config=self.backend_config_arg,
                reconfigure=True,
                quiet=True,
            )
            self.backend.state_list()
        except CommandError as e:
            raise BackendProbeFailure(str(e)) from e

    def _synthesize_backend_config(self, naming: ResolvedNaming) -> None:
        kms_key_id = resolve_kms_key_arn(
            self.ambient, naming.state.kms_alias, naming.region
        )
        backend = BackendConfig(
            bucket=naming.state.bucket,
            key=BOOTSTRAP_LAYER.state_key,
            region=naming.region,
            kms_key_id=kms_key_id,
            env_label=self.environment,
        )
        logger.info(
            "Creating backend configuration for connect-only mode",
            extra={"bucket": backend.bucket, "kms_key_id": kms_key_id},
        )
        write_backend_config(
            backend_template_path(self.terraform_dir),
            self.backend_config_file,
            backend,
        )

    def _attach_remote(self) -> None:
        restore = not self.backend_tf.is_file()
        if restore and self.backend_tf_disabled.is_file():
            self.backend_tf_disabled.rename(self.backend_tf)
            logger.info("Restored backend.tf")
        self.backend.init(
            backend_config=self.backend_config_arg,
            reconfigure=True,
            quiet=True,
        )

    # endregion

    # region Local bootstrap
    def _init_local(self) -> None:
        if self.backend_tf.is_file():
            self.backend_tf.rename(self.backend_tf_disabled)
            logger.info("Temporarily disabled remote backend")

        try:
            self.backend.init()
        except CommandError:
            if self.backend_tf_disabled.is_file():
                self.backend_tf_disabled.rename(self.backend_tf)
            raise

    def _apply(self) -> None:
        if self.options.skip_plan:
            self.backend.apply(
                var_files=self.var_files,
                auto_approve=self.options.auto_approve,
            )
            return

        self.backend.plan(self.var_files, out=config.PLAN_FILE)
        self._ask(
            BootstrapPhase.applying,
            "Review the plan above. Continue with apply?",
        )
        self.backend.apply(plan_file=config.PLAN_FILE)
        (self.terraform_dir / config.PLAN_FILE).unlink(missing_ok=True)

    # endregion

    # region Backend configs
    def _collect_backend(self, remote: bool) -> BackendConfig:
        if remote:
            values = read_backend_values(self.backend_config_file)
            bucket = values.get("bucket", "")
            kms_key_id = values.get("kms_key_id", "")
            region = values.get("region", "")
        else:
            bucket = self._output("s3_bucket_name")
            kms_key_id = self._output("kms_key_alias")
            region = self._output("aws_region")

        missing = [
            name
            for name, value in (
                ("bucket", bucket),
                ("kms_key_id", kms_key_id),
                ("region", region),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Failed to retrieve required backend values: "
                + ", ".join(missing)
            )

        return BackendConfig(
            bucket=bucket,
            key=BOOTSTRAP_LAYER.state_key,
            region=region,
            kms_key_id=kms_key_id,
            env_label=self.environment,
        )

    def _output(self, name: str) -> str:
        try:
            return self.backend.output_raw(name)
        except CommandError as e:
            logger.warning(f"Output {name} not available: {e}")
            return ""

    def _generate_layer_configs(
        self, backend: BackendConfig, naming: ResolvedNaming
    ) -> Tuple[int, int]:
        updated = 0
        skipped = 0

        for terraform_dir in discover_layer_dirs(self.project_root):
            directory = terraform_dir.parent.name
            template = backend_template_path(terraform_dir)
            output = backend_config_path(terraform_dir, self.environment)

            if not template.is_file():
                logger.warning(
                    f"Skipping {directory}: "
                    f"{config.BACKEND_CONFIG_TEMPLATE} not found"
                )
                skipped += 1
                continue

            existing = read_backend_values(output)
            region = existing.get("region") or backend.region
            kms_key_id = resolve_kms_key_arn(
                self.ambient, naming.state.kms_alias, region
            )
            layer_backend = BackendConfig(
                bucket=backend.bucket,
                key=state_key_for(directory, output),
                region=region,
                kms_key_id=kms_key_id,
                env_label=self.environment,
            )
            write_backend_config(template, output, layer_backend)
            updated += 1

        logger.info(
            f"Updated {updated} backend configuration file(s)",
            extra={"skipped": skipped},
        )
        return updated, skipped

    # endregion

    # region Migration and verification
    def _migrate_state(self) -> None:
        if self.backend_tf_disabled.is_file():
            self.backend_tf_disabled.rename(self.backend_tf)
            logger.info("Restored remote backend configuration")

        self._ask(
            BootstrapPhase.migrating_state,
            "This will migrate your state from local to the S3 backend. "
            "Continue?",
        )
        self.backend.migrate_state(self.backend_config_arg)

    def _verify(self) -> List[VerificationWarning]:
        try:
            self.backend.state_list()
        except CommandError as e:
            warning = VerificationWarning(
                f"Could not verify state access: {e}"
            )
            logger.warning(str(warning))
            return [warning]

        logger.info("State is accessible")
        return []

    # endregion
