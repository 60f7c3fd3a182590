"""
main.py
-------
Entry point for the company reports tool.

Responsibilities:
    - Initialize the database connection pool (and optionally schema + sample data).
    - Print the report digest, or export the company report to CSV / Excel.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

import psycopg2

from db.connection import close_pool, get_connection, init_pool, release_connection
from db.init_db import create_tables
from db.seed import load_sample_data
from services.export_service import ExportService
from services.report_service import ReportService
from utils.errors import ReportError
from utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Company and payment reports")
    parser.add_argument("--init", action="store_true", help="create the tables if missing")
    parser.add_argument("--seed", action="store_true", help="create the tables and load the sample data")
    parser.add_argument("--limit", type=int, default=None, help="number of oldest users in the digest")
    parser.add_argument("--export", type=Path, default=None, help="write the company report to a .csv or .xlsx file")
    return parser


def export_report(path: Path, exporter: ExportService) -> None:
    """Write the company report to ``path``; the suffix picks the format."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        buffer = exporter.export_company_report_csv()
    elif suffix == ".xlsx":
        buffer = exporter.export_company_report_excel()
    else:
        raise ValueError(f"Unsupported export format: {path.suffix or '(none)'}")
    path.write_bytes(buffer.getvalue())
    logger.info(f"Report written to {path}")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the tool and return the process exit status."""
    args = build_parser().parse_args(argv)

    # ── 1. Database setup ─────────────────────────────────
    try:
        init_pool()
    except Exception as e:
        logger.error(f"Database unavailable: {e}")
        return 1

    try:
        if args.init or args.seed:
            create_tables()
        if args.seed:
            conn = get_connection()
            try:
                load_sample_data(conn)
            finally:
                release_connection(conn)

        # ── 2. Reports ────────────────────────────────────
        reports = ReportService()
        if args.export:
            export_report(args.export, ExportService(reports))
        else:
            print(reports.build_digest(args.limit))
        return 0
    except (ReportError, ValueError, OSError, psycopg2.Error) as e:
        logger.error(f"Report failed: {e}")
        return 1
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
