"""
Replace the officer roster in any database reachable by URL (local SQLite
file or a hosted Postgres) without booting the Flask app.

    python db/import_officers.py roster.xlsx --database-url postgresql://...

DESTRUCTIVE: every officer row is deleted and re-inserted with new ids.
"""
import os
import sys
import logging

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv; load_dotenv()

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from feedback_portal.extensions import db
from feedback_portal.services.errors import ServiceError
from feedback_portal.services.roster import read_roster, replace_roster

logger = logging.getLogger("importer.officers")


def get_database_url(cli_value: str | None) -> str:
    url = cli_value or os.getenv("DATABASE_URL")
    if not url:
        logger.error("env_missing key=DATABASE_URL (or pass --database-url)")
        raise SystemExit(1)
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def _run(path: str, database_url: str | None, sheet: str | None, force: bool, dry_run: bool) -> int:
    try:
        rows = read_roster(path, sheet_name=sheet)
    except ServiceError as e:
        logger.error("read_failed error=%s", e)
        return 1

    engine = create_engine(get_database_url(database_url), pool_pre_ping=True)
    try:
        # Tables if they don't exist yet (fresh database)
        db.metadata.create_all(engine)
        with Session(engine) as session:
            result = replace_roster(session, rows, force=force, dry_run=dry_run)
    except ServiceError as e:
        logger.error("import_refused error=%s", e)
        return 2
    finally:
        engine.dispose()

    logger.info(
        "import_complete found=%s imported=%s skipped=%s dry_run=%s",
        result.found, result.imported, result.skipped, result.dry_run,
    )
    return 0


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser(description="Replace the officer roster from a spreadsheet (destructive).")
    p.add_argument("path", help="Roster .xlsx/.xls/.csv with First Name, Last Name, Job Title columns.")
    p.add_argument("--database-url", default=None, help="Target DB (default: $DATABASE_URL).")
    p.add_argument("--sheet", default=None, help="Worksheet name (default: first sheet).")
    p.add_argument("--force", action="store_true", help="Also delete feedback that would be orphaned.")
    p.add_argument("--dry-run", action="store_true", help="Plan only; write nothing.")
    p.add_argument("--verbose", "-v", action="store_true", help="Log skipped rows.")
    args = p.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    raise SystemExit(_run(args.path, args.database_url, args.sheet, args.force, args.dry_run))
