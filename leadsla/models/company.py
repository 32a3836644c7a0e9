"""
Company model — one row per dealership, carrying its pipeline stage list.
"""
from sqlalchemy import Column, Text, DateTime, JSON
from sqlalchemy.sql import func

from leadsla.database import Base


class Company(Base):
    __tablename__ = 'companies'

    id = Column(Text, primary_key=True)
    name = Column(Text, default='')
    # Ordered list of {id, name, stageOrder, isFixed, isEnabled}
    pipeline_stages = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
