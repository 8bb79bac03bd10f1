"""Entry point for running as module: python -m tlitrack"""

import sys

from tlitrack.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
