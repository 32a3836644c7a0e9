"""
Lead routes — manual reassignment.
"""
import logging
from flask import Blueprint, jsonify, request

from leadsla.scanner.base import StoreError
from leadsla.services.reassignment import (
    reassign_manually, LeadNotFound, StageNotConfigured, ReassignmentConflict,
)
from leadsla.services.store import get_store

logger = logging.getLogger('routes.leads')

bp = Blueprint('leads', __name__)


@bp.route('/api/leads/<lead_id>/reassign', methods=['POST'])
def reassign_lead(lead_id):
    """Move a lead to another salesperson and into the "Remanejados" stage."""
    data = request.get_json(silent=True) or {}
    new_id = data.get('new_salesperson_id')
    original_id = data.get('original_salesperson_id')
    if not new_id or not original_id:
        return jsonify({'error': 'new_salesperson_id and original_salesperson_id are required'}), 400

    try:
        details = reassign_manually(get_store(), lead_id, new_id, original_id)
    except LeadNotFound as e:
        return jsonify({'error': str(e)}), 404
    except ReassignmentConflict as e:
        return jsonify({'error': str(e)}), 409
    except StageNotConfigured as e:
        return jsonify({'error': str(e)}), 422
    except StoreError as e:
        logger.error("Manual reassignment of lead %s failed", lead_id, exc_info=True)
        return jsonify({'error': str(e)}), 502

    return jsonify({'id': lead_id, 'salesperson_id': new_id, 'details': details}), 200
