"""Allow running as ``python -m gitlog_export``."""

from .cli import main

main()
