"""Allow `python -m pdf_toolkit`."""

from .cli import main

raise SystemExit(main())
