"""Allow ``python -m paper_catalog``."""

import sys

from paper_catalog.cli import main

if __name__ == "__main__":
    sys.exit(main())
