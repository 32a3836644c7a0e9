"""
Manual lead reassignment — a manager moves a lead to another salesperson.

The lead lands in the company's "Remanejados" stage with the move recorded in
its details. It uses the same conditional write as the deadline scanner, so a
manual move and an automatic one never silently overwrite each other.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from leadsla.scanner.base import RowStore
from leadsla.scanner.stages import WellKnownStage, build_stage_lookup, resolve_stage

logger = logging.getLogger('services.reassignment')


class LeadNotFound(Exception):
    pass


class StageNotConfigured(Exception):
    pass


class ReassignmentConflict(Exception):
    """The lead is not owned by the salesperson the caller expected."""


def reassign_manually(store: RowStore, lead_id: str, new_salesperson_id: str,
                      original_salesperson_id: str, now: datetime = None) -> Dict[str, Any]:
    """
    Move a lead from original_salesperson_id to new_salesperson_id.

    Returns the new details dict. Raises LeadNotFound, StageNotConfigured or
    ReassignmentConflict; StoreError propagates from the store.
    """
    now = now or datetime.now(timezone.utc)

    if new_salesperson_id == original_salesperson_id:
        raise ReassignmentConflict(f"Lead {lead_id} is already owned by {new_salesperson_id}")

    lead = store.get_lead(lead_id)
    if lead is None:
        raise LeadNotFound(f"Lead {lead_id} not found")

    company = store.get_company(lead.company_id) if lead.company_id else None
    lookup = build_stage_lookup(company.pipeline_stages if company else None)
    stage_id = resolve_stage(lookup, WellKnownStage.REASSIGNED, lead.company_id)
    if stage_id is None:
        raise StageNotConfigured(
            f"Company {lead.company_id} has no '{WellKnownStage.REASSIGNED.value}' stage"
        )

    details = dict(lead.details or {})
    details.update({
        'reassigned_from': original_salesperson_id,
        'reassigned_to': new_salesperson_id,
        'reassigned_at': now.isoformat(),
    })

    applied = store.reassign_lead(lead_id, original_salesperson_id, new_salesperson_id,
                                  details, stage_id=stage_id)
    if not applied:
        raise ReassignmentConflict(
            f"Lead {lead_id} is no longer owned by {original_salesperson_id}"
        )

    logger.info("Lead %s manually reassigned from %s to %s",
                lead_id, original_salesperson_id, new_salesperson_id)
    return details
