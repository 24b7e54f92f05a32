"""
In-place migration of Parameter Store entries to SecureString.

- driver: MigrationDriver, the paginated enumerate-and-rewrite loop
- handler: CLI (`--dry-run`) and Lambda entry points
"""

from .driver import MigrationDriver

__all__ = ["MigrationDriver"]
