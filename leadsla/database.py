"""
SQL access to the CRM tables (companies, team_members, prospectai).

Production points DATABASE_URL at the CRM's Postgres; local runs and the demo
seed use a SQLite file. SqlRowStore opens one short session per call through
get_session().
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from leadsla.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


def normalize_url(url: str) -> str:
    """Hosted Postgres URLs use the postgres:// scheme, which SQLAlchemy 2.x rejects."""
    if url.startswith('postgres://'):
        return 'postgresql://' + url[len('postgres://'):]
    return url


def build_engine(url: str):
    url = normalize_url(url)
    if url.startswith('sqlite'):
        # Flask may serve the trigger from a different thread than the one that connected
        return create_engine(url, connect_args={'check_same_thread': False})
    # A scan holds at most one connection; the pool only covers concurrent HTTP triggers
    return create_engine(url, pool_pre_ping=True, pool_size=2, max_overflow=4)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine)


def get_session():
    return SessionLocal()
