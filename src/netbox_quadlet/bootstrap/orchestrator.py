"""End-to-end bootstrap: reset, render, install, start, wait, provision."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import StackConfig
from ..formatters import ProgressReporter, print_teardown_summary
from ..shared.logging import get_logger
from ..shared.process import CommandRunner
from .admin import AdminProvisioner
from .descriptor import ConnectionDescriptor
from .health import HealthCheckResult, HealthPoller
from .secrets import StackSecrets
from .stack import StackController
from .teardown import TeardownController, TeardownReport
from .templates import TemplateResolver
from .units import UnitInstaller

logger = get_logger(__name__)


@dataclass
class BootstrapResult:
    """Result of a successful bootstrap."""

    descriptor: ConnectionDescriptor
    secrets_reused: bool = False
    health: list[HealthCheckResult] = field(default_factory=list)
    admin_attempts: int = 0


class Bootstrapper:
    """Run the bootstrap pipeline against one StackConfig."""

    def __init__(
        self,
        config: StackConfig,
        runner: CommandRunner | None = None,
        reporter: ProgressReporter | None = None,
        admin: AdminProvisioner | None = None,
    ):
        self.config = config
        self.runner = runner or CommandRunner()
        self.reporter = reporter or ProgressReporter()
        self.teardown = TeardownController(config, self.runner)
        self.templates = TemplateResolver(config)
        self.units = UnitInstaller(config)
        self.stack = StackController(config, self.runner)
        self.health = HealthPoller(
            config,
            self.runner,
            on_healthy=lambda r: self.reporter.ok(f"{r.container} is healthy."),
        )
        self.admin = admin or AdminProvisioner(config, self.runner)

    def run(self, bind_address: str, keep_data: bool = False) -> BootstrapResult:
        """Bootstrap a fresh stack.

        Args:
            bind_address: Address for published ports.
            keep_data: Keep volumes and reuse stored secrets from the last run.

        Returns:
            BootstrapResult with the connection descriptor.

        Raises:
            NetboxQuadletError: On the first fatal failure.
        """
        self.reset(keep_data)

        secrets, reused = self.load_secrets(keep_data)

        self.reporter.info("Resolving template files...")
        self.templates.resolve_all(secrets.bindings())
        secrets.save(self.config.secrets_file)
        self.reporter.ok(f"Resolved files written to {self.config.generated_dir}")

        self.reporter.info(f"Installing Quadlet units to {self.config.quadlet_dir}...")
        self.units.install(bind_address)
        self.reporter.ok("Quadlet units installed.")

        self.reporter.info("Starting NetBox stack...")
        self.stack.start()
        self.reporter.ok("Pod start requested.")

        self.reporter.info(
            "Waiting for services to become healthy "
            "(this may take a few minutes on first run)..."
        )
        health = self.health.wait_all_sync()
        self.reporter.ok("All services healthy.")

        self.reporter.info("Creating admin superuser (waiting for migrations to finish)...")
        attempts = self.admin.provision(secrets.admin_password)
        self.reporter.ok("Admin user ready.")

        return BootstrapResult(
            descriptor=ConnectionDescriptor.build(self.config, secrets, bind_address),
            secrets_reused=reused,
            health=health,
            admin_attempts=attempts,
        )

    def reset(self, keep_data: bool = False) -> TeardownReport:
        """Tear down whatever a previous run left behind."""
        self.reporter.info("Tearing down NetBox stack...")
        report = self.teardown.run(keep_data=keep_data)
        print_teardown_summary(report, self.reporter)
        return report

    def load_secrets(self, keep_data: bool) -> tuple[StackSecrets, bool]:
        """Pick the secrets for this run.

        With keep_data the stored infrastructure secrets are reused so the
        preserved volumes still match; the admin password is always new.
        """
        self.reporter.info("Generating random secrets...")
        if keep_data:
            stored = StackSecrets.load(self.config.secrets_file)
            if stored is not None:
                logger.info("secrets.reused", path=str(self.config.secrets_file))
                self.reporter.ok("Reusing stored secrets for preserved data.")
                return stored, True
        secrets = StackSecrets.generate()
        self.reporter.ok("Secrets generated.")
        return secrets, False

    def abort(self) -> TeardownReport:
        """Best-effort cleanup after an interrupted run, keeping data."""
        self.reporter.warn("Interrupted - stopping and removing installed units...")
        return self.teardown.run(keep_data=True)
