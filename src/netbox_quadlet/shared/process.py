"""External command execution.

All calls to ``podman`` and ``systemctl`` go through :class:`CommandRunner`
so tests can record or fake them.
"""

from __future__ import annotations

import asyncio
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import CommandError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of an asynchronous command."""

    returncode: int
    output: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


class CommandRunner:
    """Run external commands with captured output."""

    def run(
        self,
        args: Sequence[str],
        *,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        """Run a command to completion.

        Args:
            args: Command and arguments.
            check: Raise CommandError on a non-zero exit.

        Returns:
            The completed process.

        Raises:
            CommandError: If the executable is missing, or on failure when
                ``check`` is set.
        """
        argv = [str(a) for a in args]
        logger.debug("command.run", argv=argv)
        try:
            result = subprocess.run(  # noqa: S603
                argv,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommandError(argv, message=f"{argv[0]} not found: {exc}") from exc

        if check and result.returncode != 0:
            stdout = getattr(result, "stdout", "") or ""
            stderr = getattr(result, "stderr", "") or ""
            raise CommandError(argv, result.returncode, stderr.strip() or stdout.strip())
        return result

    async def run_async(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run a command without blocking the event loop.

        A command still running after ``timeout`` seconds is killed and
        reported with ``timed_out=True``.

        Raises:
            CommandError: If the executable is missing.
        """
        argv = [str(a) for a in args]
        logger.debug("command.run_async", argv=argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError as exc:
            raise CommandError(argv, message=f"{argv[0]} not found: {exc}") from exc

        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            return CommandResult(returncode=-1, output="", timed_out=True)
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise

        output = stdout.decode(errors="replace") if stdout else ""
        returncode = proc.returncode if proc.returncode is not None else -1
        return CommandResult(returncode=returncode, output=output)
