"""Tests for the manual reassignment endpoint."""
from unittest.mock import patch

from leadsla.scanner.base import StoreError


def _post(client, lead_id, new='sp-b', original='sp-a'):
    return client.post(f'/api/leads/{lead_id}/reassign', json={
        'new_salesperson_id': new,
        'original_salesperson_id': original,
    })


class TestReassignRoute:

    def test_success(self, client, crm, patch_store):
        crm.company()
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        lead_id = crm.lead('sp-a')

        resp = _post(client, lead_id)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body['salesperson_id'] == 'sp-b'
        assert body['details']['reassigned_from'] == 'sp-a'
        assert crm.get_lead(lead_id).stage_id == 'stage-moved'

    def test_missing_fields(self, client):
        resp = client.post('/api/leads/lead-1/reassign', json={'new_salesperson_id': 'sp-b'})
        assert resp.status_code == 400

    def test_unknown_lead(self, client, crm, patch_store):
        crm.company()
        assert _post(client, 'lead-missing').status_code == 404

    def test_owner_changed(self, client, crm, patch_store):
        crm.company()
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        crm.salesperson('sp-c')
        lead_id = crm.lead('sp-c')
        assert _post(client, lead_id).status_code == 409

    def test_no_reassigned_stage(self, client, crm, patch_store):
        crm.company(stages=[])
        crm.salesperson('sp-a')
        crm.salesperson('sp-b')
        lead_id = crm.lead('sp-a')
        assert _post(client, lead_id).status_code == 422

    def test_store_failure(self, client):
        with patch('leadsla.routes.leads.reassign_manually', side_effect=StoreError('down')), \
                patch('leadsla.routes.leads.get_store'):
            resp = _post(client, 'lead-1')
        assert resp.status_code == 502
        assert resp.get_json() == {'error': 'down'}
