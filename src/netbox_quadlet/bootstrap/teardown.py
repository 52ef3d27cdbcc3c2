"""Idempotent teardown of the NetBox stack.

Every step is best effort: a resource that is already gone counts as
success, and an unexpected failure is logged and reported without stopping
the remaining steps.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..config import StackConfig
from ..errors import CommandError
from ..shared.logging import get_logger
from ..shared.process import CommandRunner

logger = get_logger(__name__)

# Output fragments podman/systemctl print when the target does not exist
ABSENT_MARKERS = (
    "no such",
    "not found",
    "not loaded",
    "does not exist",
    "no pod with name",
    "no container with name",
)


class RemovalOutcome(Enum):
    """What happened to one resource."""

    REMOVED = "removed"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass
class RemovalResult:
    """Outcome of one teardown step."""

    kind: str
    name: str
    outcome: RemovalOutcome
    detail: str = ""


@dataclass
class TeardownReport:
    """All teardown steps, in execution order."""

    results: list[RemovalResult] = field(default_factory=list)

    @property
    def failures(self) -> list[RemovalResult]:
        return [r for r in self.results if r.outcome == RemovalOutcome.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failures

    def by_kind(self, kind: str) -> list[RemovalResult]:
        return [r for r in self.results if r.kind == kind]


def classify(returncode: int, output: str) -> RemovalOutcome:
    """Map a command's exit status and output to a removal outcome."""
    if returncode == 0:
        return RemovalOutcome.REMOVED
    lowered = output.lower()
    if any(marker in lowered for marker in ABSENT_MARKERS):
        return RemovalOutcome.ABSENT
    return RemovalOutcome.FAILED


class TeardownController:
    """Stop and remove everything bootstrap created."""

    def __init__(self, config: StackConfig, runner: CommandRunner | None = None):
        self.config = config
        self.runner = runner or CommandRunner()

    def unit_patterns(self) -> list[str]:
        prefix = self.config.prefix
        return [
            f"{prefix}-*.container",
            f"{prefix}-*.volume",
            f"{self.config.pod_name}.pod",
            f"{self.config.network_name}.network",
        ]

    def run(self, keep_data: bool = False) -> TeardownReport:
        """Tear the stack down.

        Args:
            keep_data: Keep named volumes and the generated directory.

        Returns:
            TeardownReport listing the outcome of every step.
        """
        cfg = self.config
        report = TeardownReport()
        step = report.results.append
        systemctl = [cfg.systemctl_bin, "--user"]
        podman = cfg.podman_bin

        step(self._command("unit", cfg.pod_unit, [*systemctl, "stop", cfg.pod_unit]))
        step(self._command("unit", cfg.network_unit, [*systemctl, "stop", cfg.network_unit]))
        step(
            self._command(
                "reset-failed", f"{cfg.prefix}-*", [*systemctl, "reset-failed", f"{cfg.prefix}-*"]
            )
        )

        for container in cfg.containers:
            step(self._command("container", container, [podman, "rm", "-f", container]))
        step(self._command("pod", cfg.pod_name, [podman, "pod", "rm", "-f", cfg.pod_name]))

        if not keep_data:
            for volume in cfg.volumes:
                step(self._command("volume", volume, [podman, "volume", "rm", "-f", volume]))

        step(
            self._command(
                "network", cfg.network_name, [podman, "network", "rm", "-f", cfg.network_name]
            )
        )

        for result in self._remove_unit_files():
            step(result)
        step(self._command("daemon-reload", "systemd", [*systemctl, "daemon-reload"]))

        if not keep_data:
            step(self._remove_tree(cfg.generated_dir))

        for failure in report.failures:
            logger.warning(
                "teardown.step_failed",
                kind=failure.kind,
                name=failure.name,
                detail=failure.detail,
            )
        return report

    def _command(self, kind: str, name: str, args: Sequence[str]) -> RemovalResult:
        try:
            result = self.runner.run(args, check=False)
        except CommandError as exc:
            return RemovalResult(kind, name, RemovalOutcome.FAILED, str(exc))

        output = "\n".join(
            part.strip() for part in (result.stderr or "", result.stdout or "") if part.strip()
        )
        outcome = classify(result.returncode, output)
        logger.debug("teardown.step", kind=kind, name=name, outcome=outcome.value)
        return RemovalResult(kind, name, outcome, output)

    def _remove_unit_files(self) -> list[RemovalResult]:
        quadlet_dir = self.config.quadlet_dir
        results = []
        for pattern in self.unit_patterns():
            matches = sorted(quadlet_dir.glob(pattern)) if quadlet_dir.is_dir() else []
            if not matches:
                results.append(RemovalResult("unit-file", pattern, RemovalOutcome.ABSENT))
                continue
            for path in matches:
                results.append(self._remove_file(path))
        return results

    def _remove_file(self, path: Path) -> RemovalResult:
        try:
            path.unlink()
        except FileNotFoundError:
            return RemovalResult("unit-file", path.name, RemovalOutcome.ABSENT)
        except OSError as exc:
            return RemovalResult("unit-file", path.name, RemovalOutcome.FAILED, str(exc))
        return RemovalResult("unit-file", path.name, RemovalOutcome.REMOVED)

    def _remove_tree(self, path: Path) -> RemovalResult:
        if not path.exists():
            return RemovalResult("directory", str(path), RemovalOutcome.ABSENT)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return RemovalResult("directory", str(path), RemovalOutcome.ABSENT)
        except OSError as exc:
            return RemovalResult("directory", str(path), RemovalOutcome.FAILED, str(exc))
        return RemovalResult("directory", str(path), RemovalOutcome.REMOVED)
