"""Health polling for the stack's containers.

Each watched container moves PENDING -> POLLING -> HEALTHY or TIMED_OUT.
A poll runs ``podman healthcheck run <container>``; exit status 0 means
healthy. Infrastructure containers are polled concurrently, the application
container only once all of them are healthy.
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..config import ServiceCheck, StackConfig
from ..errors import HealthTimeoutError
from ..shared.logging import get_logger
from ..shared.process import CommandRunner

logger = get_logger(__name__)


class HealthState(Enum):
    """Polling state of one container."""

    PENDING = "pending"
    POLLING = "polling"
    HEALTHY = "healthy"
    TIMED_OUT = "timed_out"


@dataclass
class HealthCheckResult:
    """Result of waiting for one container."""

    container: str
    state: HealthState = HealthState.PENDING
    timeout: float = 0.0
    attempts: int = 0
    elapsed_seconds: float = 0.0
    error: str | None = None

    @property
    def healthy(self) -> bool:
        return self.state == HealthState.HEALTHY


def attempts_for(timeout: float, interval: float) -> int:
    """Number of polls that fit in *timeout* at a fixed *interval*."""
    if interval <= 0:
        raise ValueError("interval must be positive")
    return max(1, math.ceil(timeout / interval))


class HealthPoller:
    """Poll container health checks with a fixed interval and bounded time."""

    def __init__(
        self,
        config: StackConfig,
        runner: CommandRunner | None = None,
        on_healthy: Callable[[HealthCheckResult], None] | None = None,
    ):
        """Initialize health poller.

        Args:
            config: Stack configuration (interval, per-check timeout, services).
            runner: Command runner used for ``podman healthcheck run``.
            on_healthy: Optional callback invoked as each container turns
                healthy, for progress reporting.
        """
        self.config = config
        self.runner = runner or CommandRunner()
        self.on_healthy = on_healthy
        self.interval_seconds = config.health_interval

    async def check(self, container: str, timeout: float | None = None) -> tuple[bool, str]:
        """Run the container's health check once.

        Args:
            container: Container to check.
            timeout: Seconds before the check is killed. Defaults to
                ``health_check_timeout``.
        """
        timeout = self.config.health_check_timeout if timeout is None else timeout
        result = await self.runner.run_async(
            [self.config.podman_bin, "healthcheck", "run", container],
            timeout=timeout,
        )
        if result.timed_out:
            return False, f"health check timed out after {timeout:g}s"
        return result.ok, result.output.strip()

    async def wait_for_healthy(self, service: ServiceCheck) -> HealthCheckResult:
        """Poll *service* until healthy or its timeout is used up.

        The time spent in each check counts against the timeout. A check is
        killed at the deadline (but is given at least one interval), and the
        sleep between polls never runs past the deadline, so the wait exceeds
        the timeout by at most one interval.
        """
        result = HealthCheckResult(service.container, timeout=service.timeout)
        start = time.monotonic()
        deadline = start + service.timeout

        while True:
            result.state = HealthState.POLLING
            result.attempts += 1
            remaining = deadline - time.monotonic()
            check_timeout = min(
                self.config.health_check_timeout, max(remaining, self.interval_seconds)
            )
            healthy, output = await self.check(service.container, timeout=check_timeout)
            if healthy:
                result.state = HealthState.HEALTHY
                result.elapsed_seconds = time.monotonic() - start
                logger.info(
                    "health.healthy",
                    container=service.container,
                    attempts=result.attempts,
                    elapsed=round(result.elapsed_seconds, 1),
                )
                if self.on_healthy:
                    self.on_healthy(result)
                return result

            result.error = output or None
            remaining = deadline - time.monotonic()
            logger.debug(
                "health.waiting",
                container=service.container,
                attempt=result.attempts,
                remaining=round(max(remaining, 0), 1),
                output=output,
            )
            # No sleep after the last poll
            if remaining <= 0:
                break
            await asyncio.sleep(min(self.interval_seconds, remaining))
            if time.monotonic() >= deadline:
                break

        result.state = HealthState.TIMED_OUT
        result.elapsed_seconds = time.monotonic() - start
        logger.warning(
            "health.timed_out",
            container=service.container,
            attempts=result.attempts,
            elapsed=round(result.elapsed_seconds, 1),
        )
        return result

    async def wait_concurrently(self, services: Sequence[ServiceCheck]) -> list[HealthCheckResult]:
        """Poll *services* in parallel.

        The first container to time out cancels the others.

        Raises:
            HealthTimeoutError: Naming the first container that timed out.
        """
        tasks = [
            asyncio.create_task(self.wait_for_healthy(s), name=f"health:{s.container}")
            for s in services
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                result = await next_done
                if not result.healthy:
                    raise HealthTimeoutError(result.container, result.timeout)
        finally:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
        return [t.result() for t in tasks]

    async def wait_all(self) -> list[HealthCheckResult]:
        """Wait for the infrastructure containers, then the application.

        Returns:
            One result per container, infrastructure first.

        Raises:
            HealthTimeoutError: If any container never becomes healthy.
        """
        results = await self.wait_concurrently(self.config.infra_checks)
        app = await self.wait_for_healthy(self.config.app_check)
        if not app.healthy:
            raise HealthTimeoutError(app.container, app.timeout)
        return [*results, app]

    def wait_all_sync(self) -> list[HealthCheckResult]:
        """Synchronous wrapper for wait_all."""
        return asyncio.run(self.wait_all())
