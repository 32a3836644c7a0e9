"""
Hosted backend row store — talks to the project's PostgREST endpoint.

Uses the service-role key, so row-level security does not apply. Reads are
paged with limit/offset because the endpoint caps rows per response. The
conditional reassignment is a PATCH filtered on both the lead id and the
owner that was read; with `Prefer: return=representation` an empty response
body means another writer got there first.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from leadsla.config import COMPANIES_TABLE, TEAM_MEMBERS_TABLE, LEADS_TABLE
from leadsla.scanner.base import RowStore, StoreError, Company, Salesperson, LeadRecord

_CLOCK_FIELDS = ('created_at', 'prospected_at')
_LEAD_COLUMNS = 'id,company_id,salesperson_id,stage_id,details'


def _to_lead_record(row: Dict[str, Any]) -> LeadRecord:
    return LeadRecord(
        id=row['id'],
        salesperson_id=row.get('salesperson_id'),
        details=row.get('details'),
        company_id=row.get('company_id'),
        stage_id=row.get('stage_id'),
    )


class RestRowStore(RowStore):

    def __init__(self, base_url: str, service_key: str, timeout: int = 30,
                 session=None, page_size: int = 1000):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.page_size = page_size
        self.http = session or requests.Session()
        self.http.headers.update({
            'apikey': service_key,
            'Authorization': f'Bearer {service_key}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    # ── HTTP helpers ─────────────────────────────────────────────────────

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _get(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """GET every matching row, one page at a time. Multi-row reads pass an order so pages are stable."""
        rows: List[Dict[str, Any]] = []
        offset = 0
        while True:
            page_params = dict(params, limit=str(self.page_size), offset=str(offset))
            try:
                resp = self.http.get(self._url(table), params=page_params, timeout=self.timeout)
                resp.raise_for_status()
                page = resp.json()
            except (requests.RequestException, ValueError) as e:
                raise StoreError(f"GET {table} failed: {e}") from e
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            offset += self.page_size

    def _patch(self, table: str, params: Dict[str, str], body: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            resp = self.http.patch(
                self._url(table), params=params, json=body,
                headers={'Prefer': 'return=representation'},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise StoreError(f"PATCH {table} failed: {e}") from e

    # ── RowStore ─────────────────────────────────────────────────────────

    def list_companies(self) -> List[Company]:
        rows = self._get(COMPANIES_TABLE, {'select': 'id,pipeline_stages', 'order': 'id.asc'})
        return [Company(id=row['id'], pipeline_stages=row.get('pipeline_stages')) for row in rows]

    def list_salespeople(self, role: str) -> List[Salesperson]:
        rows = self._get(TEAM_MEMBERS_TABLE, {
            'select': 'id,company_id,prospect_ai_settings',
            'role': f'eq.{role}',
            'order': 'id.asc',
        })
        return [
            Salesperson(
                id=row['id'],
                company_id=row.get('company_id'),
                prospect_ai_settings=row.get('prospect_ai_settings'),
            )
            for row in rows
        ]

    def find_overdue_leads(self, salesperson_id: str, stage_id: str, clock_field: str,
                           cutoff: datetime, require_no_feedback: bool = False) -> List[LeadRecord]:
        if clock_field not in _CLOCK_FIELDS:
            raise ValueError(f"Unsupported clock field: {clock_field}")

        params = {
            'select': _LEAD_COLUMNS,
            'salesperson_id': f'eq.{salesperson_id}',
            'stage_id': f'eq.{stage_id}',
            clock_field: f'lt.{cutoff.isoformat()}',
            'order': f'{clock_field}.asc,id.asc',
        }
        if require_no_feedback:
            params['or'] = '(feedback.is.null,feedback.eq.[])'
        return [_to_lead_record(row) for row in self._get(LEADS_TABLE, params)]

    def reassign_lead(self, lead_id: str, expected_owner_id: str, new_owner_id: str,
                      details: Dict[str, Any], stage_id: Optional[str] = None) -> bool:
        body = {'salesperson_id': new_owner_id, 'details': details}
        if stage_id:
            body['stage_id'] = stage_id
        rows = self._patch(LEADS_TABLE, {
            'id': f'eq.{lead_id}',
            'salesperson_id': f'eq.{expected_owner_id}',
            'select': 'id',
        }, body)
        return len(rows) == 1

    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        rows = self._get(LEADS_TABLE, {'select': _LEAD_COLUMNS, 'id': f'eq.{lead_id}'})
        return _to_lead_record(rows[0]) if rows else None

    def get_company(self, company_id: str) -> Optional[Company]:
        rows = self._get(COMPANIES_TABLE, {'select': 'id,pipeline_stages', 'id': f'eq.{company_id}'})
        if not rows:
            return None
        return Company(id=rows[0]['id'], pipeline_stages=rows[0].get('pipeline_stages'))
