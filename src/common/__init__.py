"""
Common utilities for the SecureString migrator.

Modules:
- config: environment-backed run settings
- errors: MigrationError hierarchy
- ssm_store: Parameter Store wrapper and response models
"""

__all__ = [
    "config",
    "errors",
    "ssm_store",
]
