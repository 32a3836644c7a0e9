"""
Row store selection.

The hosted backend's REST endpoint is used when its URL and service key are
configured; otherwise the scanner talks to DATABASE_URL through SQLAlchemy.
"""
import logging

from leadsla import config
from leadsla.scanner.base import RowStore
from leadsla.services.rest_store import RestRowStore
from leadsla.services.sql_store import SqlRowStore

logger = logging.getLogger('services.store')


def get_store() -> RowStore:
    """Build the RowStore for the current configuration."""
    if config.SUPABASE_URL and config.SERVICE_ROLE_KEY:
        logger.debug("Using REST row store at %s", config.SUPABASE_URL)
        return RestRowStore(config.SUPABASE_URL, config.SERVICE_ROLE_KEY,
                            timeout=config.STORE_TIMEOUT_SECONDS,
                            page_size=config.STORE_PAGE_SIZE)
    return SqlRowStore()
