"""
Scanner data shapes and the row-store contract.

The scanner never talks to a database directly. It sees companies,
salespeople and leads through a RowStore; concrete stores (SQLAlchemy,
hosted REST backend) live in leadsla.services.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Any, Optional


class StoreError(Exception):
    """Raised by a RowStore when a read or write against the backend fails."""


@dataclass
class Company:
    id: str
    pipeline_stages: Any = None


@dataclass
class Salesperson:
    id: str
    company_id: str
    prospect_ai_settings: Optional[Dict[str, Any]] = None


@dataclass
class LeadRecord:
    """The slice of a lead the scanner needs to reassign it."""
    id: str
    salesperson_id: Optional[str]
    details: Optional[Dict[str, Any]] = None
    company_id: Optional[str] = None
    stage_id: Optional[str] = None


@dataclass
class Reassignment:
    lead_id: str
    from_id: str
    to_id: str
    rule: str
    reassigned_at: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'lead_id': self.lead_id,
            'from': self.from_id,
            'to': self.to_id,
            'rule': self.rule,
            'reassigned_at': self.reassigned_at,
        }


@dataclass
class ScanResult:
    """Outcome of one deadline scan."""
    reassigned: int = 0
    conflicts: int = 0
    skipped: int = 0
    errors: List[Dict[str, str]] = field(default_factory=list)
    reassignments: List[Reassignment] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Verification complete. Reassigned {self.reassigned} leads."

    def add_error(self, scope: str, message: str, **ids):
        self.errors.append({'scope': scope, 'message': message, **ids})


class RowStore(ABC):
    """
    Row-store operations the scanner and manual reassignment depend on.

    Implementations raise StoreError on any data-access failure.
    """

    @abstractmethod
    def list_companies(self) -> List[Company]:
        """All companies with their pipeline_stages."""
        ...

    @abstractmethod
    def list_salespeople(self, role: str) -> List[Salesperson]:
        """All team members with the given role."""
        ...

    @abstractmethod
    def find_overdue_leads(
        self,
        salesperson_id: str,
        stage_id: str,
        clock_field: str,
        cutoff: datetime,
        require_no_feedback: bool = False,
    ) -> List[LeadRecord]:
        """
        Leads owned by salesperson_id in stage_id whose clock_field
        (created_at or prospected_at) is strictly before cutoff.

        With require_no_feedback, only leads whose feedback is null or empty.
        """
        ...

    @abstractmethod
    def reassign_lead(
        self,
        lead_id: str,
        expected_owner_id: str,
        new_owner_id: str,
        details: Dict[str, Any],
        stage_id: Optional[str] = None,
    ) -> bool:
        """
        Set salesperson_id (and optionally stage_id) and replace details,
        but only if the lead is still owned by expected_owner_id.

        Returns False when no row matched (owner changed or lead gone).
        """
        ...

    @abstractmethod
    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        ...

    @abstractmethod
    def get_company(self, company_id: str) -> Optional[Company]:
        ...
