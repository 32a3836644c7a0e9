"""
TeamMember model — salespeople and managers of a company.

Only role == 'Vendedor' rows take part in deadline reassignment.
"""
from sqlalchemy import Column, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from leadsla.database import Base


class TeamMember(Base):
    __tablename__ = 'team_members'

    id = Column(Text, primary_key=True)
    company_id = Column(Text, ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, default='')
    role = Column(Text, nullable=False, default='Vendedor')
    # {"deadlines": {"initial_contact": {...}, "first_feedback": {...}}}
    prospect_ai_settings = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_team_members_company_role', 'company_id', 'role'),
    )
