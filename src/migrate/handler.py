from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from common.config import MigrationConfig
from common.errors import MigrationError
from common.ssm_store import ParameterStore
from migrate.driver import MigrationDriver


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="migrate-securestring",
        description=(
            "Convert every Parameter Store entry under MIGRATE_PATH to SecureString in place. "
            "Region and path come from MIGRATE_REGION / MIGRATE_PATH."
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the parameters that would be converted without writing anything",
    )
    return parser.parse_args(argv)


def run_once(*, dry_run: bool, config: Optional[MigrationConfig] = None, store: Optional[ParameterStore] = None) -> Dict[str, Any]:
    """
    Resolve configuration, build the store client once and run the migration.

    Returns: {"ok": True, "processed": N, "dry_run": bool, "path": str}.
    """
    config = config or MigrationConfig.from_env()
    store = store or ParameterStore.from_config(config)
    driver = MigrationDriver(store)
    processed = driver.run(config.path_prefix, dry_run)
    return {"ok": True, "processed": processed, "dry_run": dry_run, "path": config.path_prefix}


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        config = MigrationConfig.from_env()
        logging.basicConfig(level=config.logging_level(), format="%(levelname)s %(name)s: %(message)s")
        run_once(dry_run=args.dry_run, config=config)
    except MigrationError as e:
        print(f"❌ Migration failed: {e}", file=sys.stderr)
        return 1
    return 0


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda entry for a one-off migration.

    Environment:
    - MIGRATE_REGION (fallback AWS_REGION), MIGRATE_PATH (fallback PARAM_PREFIX)
    Event:
    - {"dry_run": true} to only report; absent or false runs the migration.
      Booleans and the strings "true"/"false" (any case) are accepted; any
      other value raises ValueError before the store is touched.

    Errors propagate so the invocation is marked failed.
    """
    dry_run = _parse_dry_run((event or {}).get("dry_run", False))
    return run_once(dry_run=dry_run)


def _parse_dry_run(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise ValueError(f"dry_run must be a boolean or 'true'/'false', got {raw!r}")
