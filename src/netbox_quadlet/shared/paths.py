"""Default on-disk locations for netbox-quadlet.

These are only defaults: every component receives its paths through
:class:`netbox_quadlet.config.StackConfig`.
"""

from pathlib import Path

# Base directory for netbox-quadlet state
BASE_DIR = Path.home() / ".netbox-quadlet"

# Resolved artifacts (env files, NetBox configuration, secrets.yaml)
GENERATED_DIR = BASE_DIR / "generated"

# Optional YAML config file
CONFIG_FILE = BASE_DIR / "config.yaml"

# Rootless Quadlet search path
QUADLET_DIR = Path.home() / ".config" / "containers" / "systemd"

# Templates shipped with the package
ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
