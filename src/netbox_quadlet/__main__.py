"""Allow ``python -m netbox_quadlet``."""

from .main import main

if __name__ == "__main__":
    main()
