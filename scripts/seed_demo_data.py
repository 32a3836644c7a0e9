#!/usr/bin/env python3
"""
Seed demo data for trying the deadline scan locally.

Creates one dealership with the default pipeline, three salespeople and a
handful of leads covering the interesting cases:
  1. New lead past the initial-contact deadline (reassigned to a specific teammate)
  2. New lead still inside the deadline (left alone)
  3. Prospected lead with no feedback past the first-feedback deadline (random teammate)
  4. Prospected lead that already has feedback (left alone)

Usage:
    python scripts/seed_demo_data.py          # seed
    python scripts/seed_demo_data.py --clear  # wipe seeded data first

Requires DATABASE_URL (or defaults to sqlite:///local.db).
"""
import sys
import os
import uuid
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leadsla.database import get_session, engine, Base
from leadsla.models.company import Company
from leadsla.models.team_member import TeamMember
from leadsla.models.prospect_lead import ProspectLead


# Prefix for seeded IDs so we can clear them
SEED_PREFIX = 'seed-'

STAGE_NAMES = [
    ('Novos Leads', 0, True),
    ('Primeira Tentativa', 1, False),
    ('Segunda Tentativa', 2, False),
    ('Terceira Tentativa', 3, False),
    ('Agendado', 4, False),
    ('Finalizados', 99, True),
    ('Remanejados', 100, True),
]


def make_id():
    return SEED_PREFIX + str(uuid.uuid4())


def _deadlines(initial_target=None):
    return {
        'deadlines': {
            'initial_contact': {
                'minutes': 60,
                'auto_reassign_enabled': True,
                'reassignment_mode': 'specific' if initial_target else 'random',
                'reassignment_target_id': initial_target,
            },
            'first_feedback': {
                'minutes': 240,
                'auto_reassign_enabled': True,
                'reassignment_mode': 'random',
                'reassignment_target_id': None,
            },
        },
    }


def seed(session):
    now = datetime.now(timezone.utc)
    stages = [
        {'id': make_id(), 'name': name, 'stageOrder': order, 'isFixed': fixed, 'isEnabled': True}
        for name, order, fixed in STAGE_NAMES
    ]
    stage_id = {s['name']: s['id'] for s in stages}

    company = Company(id=make_id(), name='Auto Center Demo', pipeline_stages=stages)
    session.add(company)

    ana = TeamMember(id=make_id(), company_id=company.id, name='Ana Souza', role='Vendedor')
    bruno = TeamMember(id=make_id(), company_id=company.id, name='Bruno Lima', role='Vendedor')
    carla = TeamMember(id=make_id(), company_id=company.id, name='Carla Dias', role='Vendedor')
    ana.prospect_ai_settings = _deadlines(initial_target=bruno.id)
    bruno.prospect_ai_settings = _deadlines()
    session.add_all([ana, bruno, carla])
    session.flush()

    session.add_all([
        ProspectLead(id=make_id(), company_id=company.id, salesperson_id=ana.id,
                     stage_id=stage_id['Novos Leads'], lead_name='Overdue new lead',
                     created_at=now - timedelta(minutes=90)),
        ProspectLead(id=make_id(), company_id=company.id, salesperson_id=ana.id,
                     stage_id=stage_id['Novos Leads'], lead_name='Fresh new lead',
                     created_at=now - timedelta(minutes=30)),
        ProspectLead(id=make_id(), company_id=company.id, salesperson_id=bruno.id,
                     stage_id=stage_id['Primeira Tentativa'], lead_name='Silent prospect',
                     created_at=now - timedelta(hours=8), prospected_at=now - timedelta(hours=5),
                     feedback=[]),
        ProspectLead(id=make_id(), company_id=company.id, salesperson_id=bruno.id,
                     stage_id=stage_id['Primeira Tentativa'], lead_name='Contacted prospect',
                     created_at=now - timedelta(hours=8), prospected_at=now - timedelta(hours=5),
                     feedback=[{'text': 'Called, will visit Saturday', 'images': [],
                                'createdAt': (now - timedelta(hours=4)).isoformat()}]),
    ])
    print(f'  Company:      {company.id}')
    print(f'  Salespeople:  {ana.id}, {bruno.id}, {carla.id}')


def clear_seeded_data(session):
    """Remove all seeded companies, team members and leads."""
    deleted_leads = session.query(ProspectLead).filter(
        ProspectLead.id.like(f'{SEED_PREFIX}%')).delete(synchronize_session=False)
    deleted_members = session.query(TeamMember).filter(
        TeamMember.id.like(f'{SEED_PREFIX}%')).delete(synchronize_session=False)
    deleted_companies = session.query(Company).filter(
        Company.id.like(f'{SEED_PREFIX}%')).delete(synchronize_session=False)
    session.commit()
    print(f'Cleared {deleted_companies} companies, {deleted_members} team members, {deleted_leads} leads.')


def main():
    parser = argparse.ArgumentParser(description='Seed demo data for the deadline scan')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before (or instead of) seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    # Ensure tables exist (for SQLite local dev)
    Base.metadata.create_all(engine)

    session = get_session()
    try:
        if args.clear or args.clear_only:
            clear_seeded_data(session)
            if args.clear_only:
                return

        print('Seeding demo data...')
        seed(session)
        session.commit()
        print('\nDone! Run scripts/run_deadline_scan.py to try it.')

    except Exception as e:
        session.rollback()
        print(f'Error: {e}')
        raise
    finally:
        session.close()


if __name__ == '__main__':
    main()
