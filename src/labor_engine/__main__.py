"""Entry point for running the calculators from the command line."""

import sys

from labor_engine.cli import main

if __name__ == "__main__":
    sys.exit(main())
