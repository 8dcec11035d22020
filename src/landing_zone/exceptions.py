"""Exception types raised across the landing zone toolkit.

Fatal errors derive from ``LandingZoneError`` so the CLI can report them in
one place. ``AmbientLookupFailure`` and ``BackendProbeFailure`` are raised by
collaborators and always recovered by their callers.
"""

# Standard Library
from typing import Any, Optional


class LandingZoneError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(LandingZoneError):
    """An identity field failed its format constraint."""

    def __init__(self, field: str, value: Any, constraint: str) -> None:
        self.field = field
        self.value = value
        self.constraint = constraint
        super().__init__(
            f"Invalid value for '{field}': {value!r} ({constraint})"
        )


class ConfigurationError(LandingZoneError):
    """Required project files, tfvars values or credentials are missing."""


class AmbientLookupFailure(LandingZoneError):
    """Account, region or KMS ARN could not be resolved from AWS."""


class BackendProbeFailure(LandingZoneError):
    """Remote state could not be reached while probing."""


class CommandError(LandingZoneError):
    """An external command exited with a non-zero return code."""

    def __init__(
        self,
        command: str,
        return_code: int,
        stderr: Optional[str] = None,
    ) -> None:
        self.command = command
        self.return_code = return_code
        self.stderr = stderr
        super().__init__(f"Command failed ({return_code}): {command}")


class PhaseFailure(LandingZoneError):
    """A bootstrap phase failed and the run was aborted."""

    def __init__(self, phase: Any, message: str) -> None:
        self.phase = phase
        self.message = message
        phase_name = getattr(phase, "value", phase)
        super().__init__(f"Phase '{phase_name}' failed: {message}")


class VerificationWarning(UserWarning):
    """Remote state could not be listed after the bootstrap completed."""
