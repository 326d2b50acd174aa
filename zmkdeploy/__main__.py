"""Allow running zmk-deploy with ``python -m zmkdeploy``."""

import sys

from zmkdeploy.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
