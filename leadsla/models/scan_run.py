"""
ScanRun model — Redis-backed history of deadline scans.

A ScanRun represents one invocation of the deadline scanner: when it ran,
what triggered it, how many leads it reassigned and what went wrong.
"""
import json
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional, List

from leadsla.extensions import redis_client as r
from leadsla.config import SCAN_RUN_TTL


class ScanRun:
    """
    Redis-backed ScanRun object.

    Keys:
        scan:{id}     → JSON blob of scan state
        scans:list    → sorted set of scan IDs by start time
    """

    def __init__(self, id: str = None, status: str = 'running', trigger: str = 'http'):
        self.id = id or str(uuid.uuid4())
        self.status = status
        self.trigger = trigger
        self.started_at = datetime.now(timezone.utc).isoformat()
        self.finished_at = ''
        self.reassigned = 0
        self.conflicts = 0
        self.skipped = 0
        self.errors: List[Dict] = []
        self.reassignments: List[Dict] = []
        self.message = ''

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'status': self.status,
            'trigger': self.trigger,
            'started_at': self.started_at,
            'finished_at': self.finished_at,
            'reassigned': self.reassigned,
            'conflicts': self.conflicts,
            'skipped': self.skipped,
            'errors': self.errors[-20:],
            'reassignments': self.reassignments[-50:],
            'message': self.message,
        }

    def save(self):
        """Persist scan state to Redis."""
        key = f'scan:{self.id}'
        r.setex(key, SCAN_RUN_TTL, json.dumps(self.to_dict()))
        r.zadd('scans:list', {self.id: datetime.fromisoformat(self.started_at).timestamp()})
        return self

    def complete(self, result):
        """Copy a ScanResult onto the record and mark it completed."""
        self.status = 'completed'
        self.finished_at = datetime.now(timezone.utc).isoformat()
        self.reassigned = result.reassigned
        self.conflicts = result.conflicts
        self.skipped = result.skipped
        self.errors = list(result.errors)
        self.reassignments = [item.to_dict() for item in result.reassignments]
        self.message = result.message
        self.save()

    def fail(self, reason: str = ''):
        """Mark scan as failed."""
        self.status = 'failed'
        self.finished_at = datetime.now(timezone.utc).isoformat()
        if reason:
            self.errors.append({
                'scope': 'scan',
                'message': reason,
                'timestamp': self.finished_at,
            })
            self.message = reason
        self.save()

    @classmethod
    def _from_dict(cls, d: Dict) -> 'ScanRun':
        scan = cls.__new__(cls)
        scan.id = d['id']
        scan.status = d['status']
        scan.trigger = d.get('trigger', 'http')
        scan.started_at = d['started_at']
        scan.finished_at = d.get('finished_at', '')
        scan.reassigned = d.get('reassigned', 0)
        scan.conflicts = d.get('conflicts', 0)
        scan.skipped = d.get('skipped', 0)
        scan.errors = d.get('errors', [])
        scan.reassignments = d.get('reassignments', [])
        scan.message = d.get('message', '')
        return scan

    @classmethod
    def load(cls, scan_id: str) -> Optional['ScanRun']:
        """Load a scan from Redis."""
        data = r.get(f'scan:{scan_id}')
        if not data:
            return None
        return cls._from_dict(json.loads(data))

    @classmethod
    def list_recent(cls, limit: int = 20) -> List['ScanRun']:
        """List recent scans, newest first. Expired entries are skipped."""
        scans = []
        for scan_id in r.zrevrange('scans:list', 0, limit - 1):
            scan = cls.load(scan_id)
            if scan:
                scans.append(scan)
        return scans

    @classmethod
    def delete(cls, scan_id: str):
        """Delete a scan from Redis."""
        r.delete(f'scan:{scan_id}')
        r.zrem('scans:list', scan_id)
