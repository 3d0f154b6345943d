"""Allow ``python -m eyeglass``."""

import sys

from eyeglass.cli import main

sys.exit(main())
