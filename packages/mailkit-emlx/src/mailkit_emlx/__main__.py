"""Allow ``python -m mailkit_emlx``."""

import sys

from mailkit_emlx.cli import main

sys.exit(main())
