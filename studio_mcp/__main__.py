"""Allow ``python -m studio_mcp``."""

import sys

from studio_mcp.cli import main

if __name__ == "__main__":
    sys.exit(main())
