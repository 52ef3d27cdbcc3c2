"""Error types for netbox-quadlet.

Every fatal condition raised by the bootstrap pipeline derives from
:class:`NetboxQuadletError`; the CLI turns it into an ``ERROR:`` line on
stderr and exit code 1.
"""

from __future__ import annotations

from collections.abc import Sequence

# Exit codes
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class NetboxQuadletError(Exception):
    """Base error class for netbox-quadlet."""


class ConfigError(NetboxQuadletError):
    """Configuration file or value is invalid."""


class TemplateError(NetboxQuadletError):
    """A template or unit source could not be read or written."""


class CommandError(NetboxQuadletError):
    """An external command failed or could not be started."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None = None,
        output: str = "",
        message: str | None = None,
    ):
        self.argv = list(args)
        self.returncode = returncode
        self.output = output
        if message is None:
            detail = output.strip() or "no output"
            message = f"{' '.join(self.argv)} failed (exit {returncode}): {detail}"
        super().__init__(message)


class HealthTimeoutError(NetboxQuadletError):
    """A service did not report healthy within its timeout."""

    def __init__(self, container: str, timeout: float):
        self.container = container
        self.timeout = timeout
        super().__init__(f"{container} did not become healthy within {timeout:g}s")


class AdminProvisionError(NetboxQuadletError):
    """The admin account could not be created before the timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Could not create admin user within {timeout:g}s - "
            "migrations may not have completed."
        )
