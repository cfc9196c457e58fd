"""
Refresh report snapshots from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging

from app.services.report_refresh_service import get_report_refresh_service
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch, normalize and snapshot analytics reports.")
    parser.add_argument(
        "report_ids",
        nargs="*",
        help="Report identifiers to refresh. Omit to refresh every listed report.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    service = get_report_refresh_service()
    with SessionLocal() as db:
        if args.report_ids:
            snapshots = service.refresh(db=db, report_ids=args.report_ids)
        else:
            snapshots = service.refresh_all(db=db)

    payload = {
        report_id: {
            "report_format": snapshot.report_format,
            "row_count": snapshot.row_count,
            "captured_at": snapshot.captured_at.isoformat() if snapshot.captured_at else None,
        }
        for report_id, snapshot in snapshots.items()
    }
    print(json.dumps(payload, indent=2))
    failed = [report_id for report_id in args.report_ids if report_id not in snapshots]
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
