"""Bootstrap package for the NetBox Quadlet stack.

The `netbox-quadlet bootstrap` command:
1. Tears down any previous stack
2. Generates secrets
3. Resolves env/configuration templates into the generated directory
4. Installs Quadlet units
5. Starts the network and pod units
6. Waits for container health
7. Creates (or resets) the admin account
"""

from .admin import AdminProvisioner
from .descriptor import ConnectionDescriptor
from .health import HealthCheckResult, HealthPoller, HealthState, attempts_for
from .orchestrator import Bootstrapper, BootstrapResult
from .secrets import SECRET_LENGTHS, StackSecrets, generate_secret
from .stack import StackController
from .teardown import (
    RemovalOutcome,
    RemovalResult,
    TeardownController,
    TeardownReport,
    classify,
)
from .templates import TemplateResolver, copy_tree, find_placeholders, resolve_file, resolve_text
from .units import UnitInstaller

__all__ = [
    # Secrets
    "SECRET_LENGTHS",
    "StackSecrets",
    "generate_secret",
    # Templates
    "TemplateResolver",
    "copy_tree",
    "find_placeholders",
    "resolve_file",
    "resolve_text",
    # Units
    "UnitInstaller",
    # Stack
    "StackController",
    # Health polling
    "HealthCheckResult",
    "HealthPoller",
    "HealthState",
    "attempts_for",
    # Admin
    "AdminProvisioner",
    # Result
    "ConnectionDescriptor",
    # Teardown
    "RemovalOutcome",
    "RemovalResult",
    "TeardownController",
    "TeardownReport",
    "classify",
    # Orchestration
    "Bootstrapper",
    "BootstrapResult",
]
