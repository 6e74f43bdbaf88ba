"""Allow ``python -m crockid``."""

import sys

from crockid.cli import main

sys.exit(main())
