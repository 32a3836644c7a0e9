"""
Deadline routes — scheduler trigger for the lead reassignment scan.

The scheduler sends no parameters; the request body is ignored.
"""
from flask import Blueprint, jsonify, Response

from leadsla.scanner.job import execute_scan

bp = Blueprint('deadlines', __name__)


@bp.route('/functions/v1/verificar-prazos', methods=['GET', 'POST'])
@bp.route('/api/deadlines/verify', methods=['POST'])
def verify_deadlines():
    """Run one deadline scan and report how many leads were reassigned."""
    try:
        result = execute_scan(trigger='http')
    except Exception as e:
        return Response(str(e), status=500, mimetype='text/plain')
    return jsonify({'message': result.message}), 200
