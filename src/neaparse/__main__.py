"""Allow running neaparse as ``python -m neaparse``."""

import sys

from .cli import main

sys.exit(main())
