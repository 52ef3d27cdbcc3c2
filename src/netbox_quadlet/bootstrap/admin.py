"""Admin account provisioning inside the running NetBox container."""

from __future__ import annotations

import time
from collections.abc import Callable

from ..config import StackConfig
from ..errors import AdminProvisionError
from ..shared.logging import get_logger
from ..shared.process import CommandRunner
from .health import attempts_for

logger = get_logger(__name__)

MANAGE_PY = ["/opt/netbox/venv/bin/python", "/opt/netbox/netbox/manage.py"]

PASSWORD_ENV = "NETBOX_ADMIN_PASSWORD"

# Creates the superuser, or resets its password when it already exists.
# Username and email are interpolated; the password is passed through the
# exec environment.
ADMIN_SCRIPT = """\
import os
from django.contrib.auth import get_user_model
User = get_user_model()
password = os.environ[{password_env!r}]
if not User.objects.filter(username={username!r}).exists():
    User.objects.create_superuser({username!r}, {email!r}, password)
    print('Superuser created.')
else:
    u = User.objects.get(username={username!r})
    u.set_password(password)
    u.save()
    print('Superuser password reset.')
"""


class AdminProvisioner:
    """Ensure the NetBox admin account exists with a known password.

    Attempts fail while migrations are still running, so they are retried at
    a fixed interval until the configured timeout is used up.
    """

    def __init__(
        self,
        config: StackConfig,
        runner: CommandRunner | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.runner = runner or CommandRunner()
        self.sleep = sleep

    def script(self) -> str:
        return ADMIN_SCRIPT.format(
            password_env=PASSWORD_ENV,
            username=self.config.admin_username,
            email=self.config.admin_email,
        )

    def command(self, password: str) -> list[str]:
        return [
            self.config.podman_bin,
            "exec",
            "-e",
            f"{PASSWORD_ENV}={password}",
            self.config.app_container,
            *MANAGE_PY,
            "shell",
            "-c",
            self.script(),
        ]

    def provision(self, password: str) -> int:
        """Create or reset the admin account.

        Args:
            password: Password to set on the admin account.

        Returns:
            Number of attempts it took.

        Raises:
            AdminProvisionError: If no attempt succeeded within the timeout.
        """
        max_attempts = attempts_for(self.config.admin_timeout, self.config.admin_interval)
        last_output = ""

        for attempt in range(1, max_attempts + 1):
            result = self.runner.run(self.command(password), check=False)
            if result.returncode == 0:
                logger.info(
                    "admin.provisioned",
                    username=self.config.admin_username,
                    attempts=attempt,
                    output=(result.stdout or "").strip(),
                )
                return attempt

            last_output = (result.stderr or result.stdout or "").strip()
            logger.debug("admin.retry", attempt=attempt, max_attempts=max_attempts)
            if attempt < max_attempts:
                self.sleep(self.config.admin_interval)

        logger.warning("admin.failed", attempts=max_attempts, output=last_output)
        raise AdminProvisionError(self.config.admin_timeout)
