import os
import sys

import pytest


def pytest_configure():
    # Ensure `src/` is importable as top-level for `common.*` and `migrate.*` imports
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def _clean_migrate_env(monkeypatch):
    # Keep the developer's shell configuration out of the tests
    for name in ("MIGRATE_REGION", "MIGRATE_PATH", "MIGRATE_LOG_LEVEL", "AWS_REGION", "PARAM_PREFIX"):
        monkeypatch.delenv(name, raising=False)
