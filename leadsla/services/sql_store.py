"""
SQLAlchemy row store — reads and writes the CRM tables directly in Postgres.

Every call opens its own session. Failures roll back and surface as
StoreError so the scanner can decide whether they are fatal.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Text, cast, or_, update

from leadsla.database import get_session
from leadsla.models.company import Company as CompanyRow
from leadsla.models.team_member import TeamMember
from leadsla.models.prospect_lead import ProspectLead
from leadsla.scanner.base import RowStore, StoreError, Company, Salesperson, LeadRecord

_CLOCK_COLUMNS = {
    'created_at': ProspectLead.created_at,
    'prospected_at': ProspectLead.prospected_at,
}

# JSON text of "no feedback yet" as stored by the CRM
_EMPTY_FEEDBACK = ('[]', 'null')


def _to_lead_record(row: ProspectLead) -> LeadRecord:
    return LeadRecord(
        id=row.id,
        salesperson_id=row.salesperson_id,
        details=row.details,
        company_id=row.company_id,
        stage_id=row.stage_id,
    )


class SqlRowStore(RowStore):

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session

    def list_companies(self) -> List[Company]:
        session = self._session_factory()
        try:
            rows = session.query(CompanyRow.id, CompanyRow.pipeline_stages).all()
            return [Company(id=row.id, pipeline_stages=row.pipeline_stages) for row in rows]
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to load companies: {e}") from e
        finally:
            session.close()

    def list_salespeople(self, role: str) -> List[Salesperson]:
        session = self._session_factory()
        try:
            rows = (
                session.query(TeamMember.id, TeamMember.company_id, TeamMember.prospect_ai_settings)
                .filter(TeamMember.role == role)
                .order_by(TeamMember.company_id, TeamMember.id)
                .all()
            )
            return [
                Salesperson(id=row.id, company_id=row.company_id, prospect_ai_settings=row.prospect_ai_settings)
                for row in rows
            ]
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to load salespeople: {e}") from e
        finally:
            session.close()

    def find_overdue_leads(self, salesperson_id: str, stage_id: str, clock_field: str,
                           cutoff: datetime, require_no_feedback: bool = False) -> List[LeadRecord]:
        clock = _CLOCK_COLUMNS.get(clock_field)
        if clock is None:
            raise ValueError(f"Unsupported clock field: {clock_field}")

        session = self._session_factory()
        try:
            query = session.query(ProspectLead).filter(
                ProspectLead.salesperson_id == salesperson_id,
                ProspectLead.stage_id == stage_id,
                clock < cutoff,
            )
            if require_no_feedback:
                query = query.filter(or_(
                    ProspectLead.feedback.is_(None),
                    cast(ProspectLead.feedback, Text).in_(_EMPTY_FEEDBACK),
                ))
            return [_to_lead_record(row) for row in query.order_by(clock).all()]
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to query leads for salesperson {salesperson_id}: {e}") from e
        finally:
            session.close()

    def reassign_lead(self, lead_id: str, expected_owner_id: str, new_owner_id: str,
                      details: Dict[str, Any], stage_id: Optional[str] = None) -> bool:
        values = {'salesperson_id': new_owner_id, 'details': details}
        if stage_id:
            values['stage_id'] = stage_id

        session = self._session_factory()
        try:
            result = session.execute(
                update(ProspectLead)
                .where(ProspectLead.id == lead_id, ProspectLead.salesperson_id == expected_owner_id)
                .values(**values)
            )
            session.commit()
            return result.rowcount == 1
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to reassign lead {lead_id}: {e}") from e
        finally:
            session.close()

    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        session = self._session_factory()
        try:
            row = session.get(ProspectLead, lead_id)
            return _to_lead_record(row) if row else None
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to load lead {lead_id}: {e}") from e
        finally:
            session.close()

    def get_company(self, company_id: str) -> Optional[Company]:
        session = self._session_factory()
        try:
            row = session.get(CompanyRow, company_id)
            return Company(id=row.id, pipeline_stages=row.pipeline_stages) if row else None
        except Exception as e:
            session.rollback()
            raise StoreError(f"Failed to load company {company_id}: {e}") from e
        finally:
            session.close()
