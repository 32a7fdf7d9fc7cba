"""
gitlog-export - turn git commit history into CSV, JSON Lines or PostgreSQL scripts.

Parses ``git log --shortstat`` output into validated commit records and
streams them through a shared schema into the selected output format.
"""

__version__ = "0.3.0"
