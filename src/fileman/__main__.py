"""Allow ``python -m fileman``."""

from .cli import main

raise SystemExit(main())
