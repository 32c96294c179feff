"""Command-line interface."""
import sys

from linearlab.app.main import main

if __name__ == "__main__":
    sys.exit(main())
