#!/usr/bin/env python3
"""
Run one deadline scan from the command line.

For cron hosts that prefer running a process over calling the HTTP trigger.

Usage:
    python scripts/run_deadline_scan.py

Exit code 0 on success, 1 when companies or salespeople could not be loaded.
Requires DATABASE_URL (or SUPABASE_URL + SERVICE_ROLE_KEY) and Redis.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leadsla.logging_config import configure_logging
from leadsla.scanner.job import execute_scan


def main() -> int:
    configure_logging()
    try:
        result = execute_scan(trigger='cli')
    except Exception as e:
        print(f'ERROR {e}')
        return 1
    print(result.message)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
