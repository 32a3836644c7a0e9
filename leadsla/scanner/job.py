"""
Deadline scan job — one scheduled invocation.

Wraps run_deadline_scan() with scan history (Redis) and Slack notifications.
Neither of those may fail the job; only the scan itself can.
"""
import logging
from datetime import datetime

from leadsla.models.scan_run import ScanRun
from leadsla.scanner.base import RowStore, ScanResult
from leadsla.scanner.scanner import run_deadline_scan
from leadsla.services.notifications import notify_scan_complete, notify_scan_failed
from leadsla.services.store import get_store

logger = logging.getLogger('scanner.job')


def _record(action, *args):
    try:
        action(*args)
    except Exception:
        logger.warning("Could not record scan history", exc_info=True)


def execute_scan(store: RowStore = None, trigger: str = 'http',
                 now: datetime = None, rng=None) -> ScanResult:
    """
    Run a full deadline scan and record it.

    Re-raises the error when companies or salespeople cannot be loaded, after
    marking the scan as failed.
    """
    scan = ScanRun(trigger=trigger)
    _record(scan.save)
    logger.info("Starting deadline scan %s (trigger=%s)", scan.id, trigger, extra={'scan_id': scan.id})

    try:
        result = run_deadline_scan(store or get_store(), now=now, rng=rng)
    except Exception as e:
        logger.error("Deadline scan %s failed", scan.id, exc_info=True, extra={'scan_id': scan.id})
        _record(scan.fail, str(e))
        notify_scan_failed(scan, str(e))
        raise

    _record(scan.complete, result)
    notify_scan_complete(scan)
    logger.info("Deadline scan %s: %s", scan.id, result.message, extra={'scan_id': scan.id})
    return result
