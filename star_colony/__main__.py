"""Allow running the game with ``python -m star_colony``."""

import sys

from .cli import main

sys.exit(main())
