"""
Scan history routes — recent deadline scans from Redis.
"""
from flask import Blueprint, jsonify, request

from leadsla.models.scan_run import ScanRun

bp = Blueprint('scans', __name__)


@bp.route('/api/scans')
def list_scans():
    """List recent scans, newest first."""
    limit = min(request.args.get('limit', 20, type=int), 100)
    try:
        scans = ScanRun.list_recent(limit=limit)
    except Exception as e:
        return jsonify({'error': str(e)}), 503
    return jsonify({'scans': [scan.to_dict() for scan in scans]})


@bp.route('/api/scans/<scan_id>')
def get_scan(scan_id):
    """Single scan detail."""
    try:
        scan = ScanRun.load(scan_id)
    except Exception as e:
        return jsonify({'error': str(e)}), 503
    if not scan:
        return jsonify({'error': 'Scan not found'}), 404
    return jsonify(scan.to_dict())
