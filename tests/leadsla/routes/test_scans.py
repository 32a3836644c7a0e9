"""Tests for scan history and health endpoints."""
import json

from leadsla.models.scan_run import ScanRun


class TestScanRoutes:

    def test_list_scans(self, client, mock_redis):
        mock_redis.zrevrange.return_value = ['scan-1']
        mock_redis.get.return_value = json.dumps(ScanRun(id='scan-1', trigger='cli').to_dict())

        resp = client.get('/api/scans?limit=500')

        assert resp.status_code == 200
        assert [s['id'] for s in resp.get_json()['scans']] == ['scan-1']
        mock_redis.zrevrange.assert_called_with('scans:list', 0, 99)

    def test_list_scans_redis_down(self, client, mock_redis):
        mock_redis.zrevrange.side_effect = ConnectionError('redis down')
        assert client.get('/api/scans').status_code == 503

    def test_get_scan(self, client, mock_redis):
        mock_redis.get.return_value = json.dumps(ScanRun(id='scan-1').to_dict())
        resp = client.get('/api/scans/scan-1')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'running'

    def test_get_scan_not_found(self, client):
        assert client.get('/api/scans/nope').status_code == 404


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'healthy'}
