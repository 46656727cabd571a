"""Allow ``python -m texmark``."""

import sys

from texmark.cli import main

sys.exit(main())
