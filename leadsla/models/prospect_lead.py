"""
ProspectLead model — Farm pipeline leads (table `prospectai`).
"""
from sqlalchemy import Column, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from leadsla.database import Base


class ProspectLead(Base):
    __tablename__ = 'prospectai'

    id = Column(Text, primary_key=True)
    company_id = Column(Text, ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)
    salesperson_id = Column(Text, ForeignKey('team_members.id', ondelete='SET NULL'), nullable=True)
    stage_id = Column(Text, nullable=True)
    lead_name = Column(Text, default='')
    # Ordered list of {text, images, createdAt}; NULL or [] until first contact
    feedback = Column(JSON(none_as_null=True), nullable=True)
    details = Column(JSON(none_as_null=True), nullable=True)
    prospected_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_prospectai_salesperson_stage', 'salesperson_id', 'stage_id'),
    )
