"""Terraform CLI wrapper used as the state backend client."""

# Standard Library
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone import config
from landing_zone.exceptions import CommandError

# Initialize logger
logger = Logger(service="terraform-cli")

# Characters of captured stderr kept on a CommandError
STDERR_TAIL = 4000


class StateBackendClient(ABC):
    """Interface for the operations the bootstrap needs from Terraform.

    Every method raises ``CommandError`` when the underlying call fails.
    """

    @abstractmethod
    def init(
        self,
        backend_config: Optional[Path] = None,
        reconfigure: bool = False,
        quiet: bool = False,
    ) -> None:
        """Initialize the working directory, optionally against a backend."""

    @abstractmethod
    def state_list(self) -> List[str]:
        """Return the resource addresses tracked in state."""

    @abstractmethod
    def plan(self, var_files: Sequence[str], out: str) -> None:
        """Write a plan for the given var files to ``out``."""

    @abstractmethod
    def apply(
        self,
        plan_file: Optional[str] = None,
        var_files: Sequence[str] = (),
        auto_approve: bool = False,
    ) -> None:
        """Apply a saved plan, or the configuration directly."""

    @abstractmethod
    def migrate_state(self, backend_config: Path) -> None:
        """Move local state into the backend in ``backend_config``."""

    @abstractmethod
    def output_raw(self, name: str) -> str:
        """Return the raw value of a root module output."""


class TerraformCli(StateBackendClient):
    """Runs the ``terraform`` binary inside a layer's terraform directory."""

    def __init__(
        self,
        working_dir: Union[str, Path],
        binary: Optional[str] = None,
    ) -> None:
        """Initialize the wrapper.

        Parameters
        ----------
        working_dir : Union[str, Path]
            Directory every command runs in.
        binary : Optional[str]
            Terraform executable, defaults to ``LZ_TERRAFORM_BIN``.
        """
        self.working_dir = Path(working_dir)
        self.binary = binary or config.TERRAFORM_BIN

    def is_available(self) -> bool:
        """Return whether the Terraform binary can be found on ``PATH``."""
        return shutil.which(self.binary) is not None

    def _run(self, args: Sequence[str], capture: bool) -> str:
        command = [self.binary, *args]
        command_display = " ".join(command)
        logger.info(
            f"Running: {command_display}",
            extra={"cwd": str(self.working_dir)},
        )
        try:
            result = subprocess.run(
                command,
                cwd=str(self.working_dir),
                check=False,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            logger.error(f"Terraform binary not found: {self.binary}")
            raise CommandError(command_display, 127, str(e)) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()[-STDERR_TAIL:] or None
            logger.error(
                f"Command failed ({result.returncode}): {command_display}"
            )
            raise CommandError(command_display, result.returncode, stderr)

        return result.stdout or ""

    def init(
        self,
        backend_config: Optional[Path] = None,
        reconfigure: bool = False,
        quiet: bool = False,
    ) -> None:
        args = ["init"]
        if backend_config is not None:
            args.append(f"-backend-config={backend_config}")
        if reconfigure:
            args.append("-reconfigure")
        if quiet:
            args.append("-input=false")
        self._run(args, capture=quiet)

    def state_list(self) -> List[str]:
        output = self._run(["state", "list"], capture=True)
        return [line for line in output.splitlines() if line.strip()]

    def plan(self, var_files: Sequence[str], out: str) -> None:
        args = ["plan", *(f"-var-file={path}" for path in var_files)]
        args.append(f"-out={out}")
        self._run(args, capture=False)

    def apply(
        self,
        plan_file: Optional[str] = None,
        var_files: Sequence[str] = (),
        auto_approve: bool = False,
    ) -> None:
        if plan_file is not None:
            self._run(["apply", plan_file], capture=False)
            return

        args = ["apply", *(f"-var-file={path}" for path in var_files)]
        if auto_approve:
            args.append("-auto-approve")
        self._run(args, capture=False)

    def migrate_state(self, backend_config: Path) -> None:
        self._run(
            ["init", "-migrate-state", f"-backend-config={backend_config}"],
            capture=False,
        )

    def output_raw(self, name: str) -> str:
        return self._run(["output", "-raw", name], capture=True).strip()
