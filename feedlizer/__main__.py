"""``python -m feedlizer``: same commands as the ``feedlizer`` console script."""

from .cli import main

raise SystemExit(main())
