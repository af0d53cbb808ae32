"""Apply pending SmartSummary SQL migrations.

Files in the migrations directory run once each, in name order; applied names
are recorded in `schema_migrations`.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

import psycopg

from smartsummary.config import Settings
from smartsummary.utils.logging_setup import setup_logging

_REPO_ROOT = Path(__file__).resolve().parents[1]

logger = logging.getLogger("smartsummary.migrate")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply SmartSummary SQL migrations to PostgreSQL.")
    parser.add_argument(
        "--migrations-dir",
        default=str(_REPO_ROOT / "infra" / "migrations"),
        help="Directory containing *.sql migrations (default: infra/migrations)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Connection string (default: built from POSTGRES_* settings)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="List applied and pending migrations without changing anything",
    )
    return parser.parse_args()


def _pending(migrations_dir: Path, applied: set[str]) -> list[Path]:
    return [p for p in sorted(migrations_dir.glob("*.sql")) if p.is_file() and p.name not in applied]


def _applied_names(conn: psycopg.Connection) -> set[str]:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
          name TEXT PRIMARY KEY,
          applied_at TIMESTAMPTZ NOT NULL
        )
        """
    )
    conn.commit()
    return {str(row[0]) for row in conn.execute("SELECT name FROM schema_migrations").fetchall()}


def main() -> int:
    args = _parse_args()
    settings = Settings()
    setup_logging(settings)

    migrations_dir = Path(args.migrations_dir).resolve()
    if not migrations_dir.is_dir():
        raise SystemExit(f"migrations dir not found: {migrations_dir}")

    with psycopg.connect(args.database_url or settings.database_url, autocommit=False) as conn:
        applied = _applied_names(conn)
        pending = _pending(migrations_dir, applied)

        if args.status:
            for name in sorted(applied):
                print(f"applied  {name}")
            for path in pending:
                print(f"pending  {path.name}")
            return 0

        if not pending:
            logger.info("database is up to date (%d applied)", len(applied))
            return 0

        for path in pending:
            # One transaction per file so a broken migration leaves earlier ones in place.
            conn.execute(path.read_text(encoding="utf-8"))
            conn.execute(
                "INSERT INTO schema_migrations (name, applied_at) VALUES (%s, %s)",
                (path.name, datetime.now(tz=timezone.utc)),
            )
            conn.commit()
            logger.info("applied migration %s", path.name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
