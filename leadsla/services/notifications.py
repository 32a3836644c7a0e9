"""
Notifications — Slack webhook integration for scan events.

Notification failure never blocks the scan.
"""
import logging
import requests

from leadsla.config import SLACK_WEBHOOK_URL

logger = logging.getLogger('services.notifications')


def notify_scan_complete(scan):
    """Post a scan summary to Slack when it reassigned leads or hit errors."""
    if not SLACK_WEBHOOK_URL:
        return
    if not scan.reassigned and not scan.errors:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": "Lead Deadline Scan Completed",
                }
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Reassigned:* {scan.reassigned}"},
                    {"type": "mrkdwn", "text": f"*Conflicts:* {scan.conflicts}"},
                    {"type": "mrkdwn", "text": f"*Skipped:* {scan.skipped}"},
                    {"type": "mrkdwn", "text": f"*Errors:* {len(scan.errors)}"},
                ]
            },
        ]

        if scan.errors:
            last = scan.errors[-1]
            blocks.append({
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Last error:* ```{last.get('message', '')[:500]}```"}
            })

        requests.post(SLACK_WEBHOOK_URL, json={"blocks": blocks}, timeout=10)
        logger.info("Scan %s completion notification sent", scan.id[:8])

    except Exception:
        logger.error("Failed to send notification for scan %s", scan.id[:8], exc_info=True)


def notify_scan_failed(scan, error_message):
    """Post a scan failure alert to Slack."""
    if not SLACK_WEBHOOK_URL:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": "Lead Deadline Scan FAILED",
                }
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Error:* ```{str(error_message)[:500]}```"}
            },
        ]

        requests.post(SLACK_WEBHOOK_URL, json={"blocks": blocks}, timeout=10)
        logger.info("Scan %s failure notification sent", scan.id[:8])

    except Exception:
        logger.error("Failed to send failure notification for scan %s", scan.id[:8], exc_info=True)
