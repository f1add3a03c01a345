#!/usr/bin/env python3
"""
Lightweight DB checker for the `file` table.
Usage:
  # use DATABASE_URL env (or .env)
  python scripts/query_files_db.py

  # or pass as argument
  python scripts/query_files_db.py --db "postgresql://..." --limit 50

Prints the newest file rows. Rows whose content points at the external drive
show the drive object id instead of the content.
"""
import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from storagehub.config import Settings
from storagehub.database import make_engine, make_session_factory
from storagehub.models import File
from storagehub.utils import parse_drive_content


def fetch_rows(db_url, limit=20, ssl_no_verify=True):
    engine = make_engine(db_url, ssl_no_verify=ssl_no_verify)
    db = make_session_factory(engine)()
    try:
        files = db.query(File).order_by(File.id.desc()).limit(limit).all()
        return [
            (f.id, f.name, f.size, f.user_id, parse_drive_content(f.content) or "(inline)")
            for f in files
        ]
    finally:
        db.close()
        engine.dispose()


def pretty_print(rows, out=sys.stdout):
    print('\nLatest rows:', file=out)
    if not rows:
        print('(no rows)', file=out)
        return
    widths = [6, 30, 10, 8, 40]
    header = ["id", "name", "size", "owner", "drive id"]
    fmt = " | ".join([f"{{:{w}}}" for w in widths])
    print(fmt.format(*header), file=out)
    print('-' * (sum(widths) + 3 * (len(widths) - 1)), file=out)
    for id_, name, size, owner, drive_id in rows:
        print(fmt.format(str(id_), (name or '')[:widths[1]], str(size), str(owner),
                         drive_id[:widths[4]]), file=out)


def main(argv=None, out=sys.stdout):
    p = argparse.ArgumentParser()
    p.add_argument('--db', help='DATABASE_URL override')
    p.add_argument('--limit', type=int, default=20)
    args = p.parse_args(argv)

    settings = Settings.from_env()
    db_url = (args.db or settings.database_url).strip()
    try:
        rows = fetch_rows(db_url, args.limit, settings.database_ssl_no_verify)
    except SQLAlchemyError as e:
        print('Error connecting/querying DB:', e, file=sys.stderr)
        return 3

    pretty_print(rows, out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
