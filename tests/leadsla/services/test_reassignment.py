"""Tests for leadsla.services.reassignment — manual reassignment."""
from datetime import datetime, timezone, timedelta

import pytest

from leadsla.services.reassignment import (
    reassign_manually, LeadNotFound, StageNotConfigured, ReassignmentConflict,
)

NOW = datetime(2026, 10, 19, 15, 30, 0, tzinfo=timezone.utc)


class TestReassignManually:

    def test_moves_lead_to_reassigned_stage(self, crm, sql_store):
        crm.company()
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        lead_id = crm.lead('sp-a', stage_id='stage-first', created_at=NOW - timedelta(days=1),
                           details={'origin': 'site'})

        details = reassign_manually(sql_store, lead_id, 'sp-b', 'sp-a', now=NOW)

        assert details == {
            'origin': 'site',
            'reassigned_from': 'sp-a',
            'reassigned_to': 'sp-b',
            'reassigned_at': NOW.isoformat(),
        }
        lead = crm.get_lead(lead_id)
        assert lead.salesperson_id == 'sp-b'
        assert lead.stage_id == 'stage-moved'
        assert lead.details == details

    def test_missing_lead(self, crm, sql_store):
        crm.company()
        with pytest.raises(LeadNotFound):
            reassign_manually(sql_store, 'lead-missing', 'sp-b', 'sp-a', now=NOW)

    def test_company_without_reassigned_stage(self, crm, sql_store):
        crm.company(stages=[{'id': 'stage-new', 'name': 'Novos Leads'}])
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        lead_id = crm.lead('sp-a', created_at=NOW)

        with pytest.raises(StageNotConfigured):
            reassign_manually(sql_store, lead_id, 'sp-b', 'sp-a', now=NOW)
        assert crm.get_lead(lead_id).salesperson_id == 'sp-a'

    def test_stale_original_owner_conflicts(self, crm, sql_store):
        crm.company()
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        crm.salesperson('sp-c')
        lead_id = crm.lead('sp-c', created_at=NOW)

        with pytest.raises(ReassignmentConflict):
            reassign_manually(sql_store, lead_id, 'sp-b', 'sp-a', now=NOW)
        assert crm.get_lead(lead_id).salesperson_id == 'sp-c'

    def test_same_owner_is_a_conflict(self, crm, sql_store):
        with pytest.raises(ReassignmentConflict):
            reassign_manually(sql_store, 'lead-1', 'sp-a', 'sp-a', now=NOW)
