"""Shared test fixtures."""
import uuid
from datetime import datetime, timezone

import pytest
from unittest.mock import patch, MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from leadsla.database import Base


DEFAULT_STAGES = [
    {'id': 'stage-new', 'name': 'Novos Leads', 'stageOrder': 0, 'isFixed': True, 'isEnabled': True},
    {'id': 'stage-first', 'name': 'Primeira Tentativa', 'stageOrder': 1, 'isFixed': False, 'isEnabled': True},
    {'id': 'stage-done', 'name': 'Finalizados', 'stageOrder': 99, 'isFixed': True, 'isEnabled': True},
    {'id': 'stage-moved', 'name': 'Remanejados', 'stageOrder': 100, 'isFixed': True, 'isEnabled': True},
]


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import leadsla.models.company
    import leadsla.models.team_member
    import leadsla.models.prospect_lead
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def sql_store(db_engine):
    """SqlRowStore whose sessions share the in-memory engine."""
    from leadsla.services.sql_store import SqlRowStore
    return SqlRowStore(session_factory=sessionmaker(bind=db_engine))


@pytest.fixture(autouse=True)
def mock_redis():
    """Mock Redis client used by ScanRun. Returns a MagicMock with common Redis methods."""
    mock = MagicMock()
    mock.get.return_value = None
    mock.setex.return_value = True
    mock.zadd.return_value = 1
    mock.zrevrange.return_value = []
    with patch('leadsla.models.scan_run.r', mock):
        yield mock


@pytest.fixture
def patch_store(sql_store):
    """Route get_store() in the job and the lead routes to the test store."""
    with patch('leadsla.scanner.job.get_store', return_value=sql_store), \
            patch('leadsla.routes.leads.get_store', return_value=sql_store):
        yield sql_store


@pytest.fixture
def app():
    """Flask test app."""
    from leadsla import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def crm(db_session):
    """Factory fixture — inserts companies, team members and leads, committed."""
    from leadsla.models.company import Company
    from leadsla.models.team_member import TeamMember
    from leadsla.models.prospect_lead import ProspectLead

    class Crm:
        def company(self, id='company-1', stages=DEFAULT_STAGES):
            db_session.add(Company(id=id, name=id, pipeline_stages=stages))
            db_session.commit()
            return id

        def salesperson(self, id, company_id='company-1', settings=None, role='Vendedor'):
            db_session.add(TeamMember(id=id, company_id=company_id, name=id,
                                      role=role, prospect_ai_settings=settings))
            db_session.commit()
            return id

        def lead(self, salesperson_id, stage_id='stage-new', created_at=None,
                 prospected_at=None, feedback=None, details=None, company_id='company-1', id=None):
            lead = ProspectLead(
                id=id or f'lead-{uuid.uuid4().hex[:8]}',
                company_id=company_id,
                salesperson_id=salesperson_id,
                stage_id=stage_id,
                created_at=created_at,
                prospected_at=prospected_at,
                feedback=feedback,
                details=details,
            )
            db_session.add(lead)
            db_session.commit()
            return lead.id

        def get_lead(self, lead_id):
            db_session.expire_all()
            return db_session.get(ProspectLead, lead_id)

    return Crm()
