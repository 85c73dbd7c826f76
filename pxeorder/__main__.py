"""Allow running as ``python -m pxeorder``."""

import sys

from pxeorder.cli import main

sys.exit(main())
