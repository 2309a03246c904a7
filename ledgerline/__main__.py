"""Allow ``python -m ledgerline``."""

from ledgerline.cli.main import main

raise SystemExit(main())
