"""Allow running gitxray with ``python -m gitxray``."""

import sys

from gitxray.cli import main

if __name__ == "__main__":
	sys.exit(main())
