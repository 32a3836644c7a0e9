"""
Centralized configuration — all env vars and domain constants.
"""
import os


# ── Redis (scan history) ─────────────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Hosted backend (REST row store) ──────────────────────────────────────────
SUPABASE_URL = os.getenv('SUPABASE_URL')
SERVICE_ROLE_KEY = os.getenv('SERVICE_ROLE_KEY')
STORE_TIMEOUT_SECONDS = int(os.getenv('STORE_TIMEOUT_SECONDS', '30'))
# Must not exceed the endpoint's max-rows setting
STORE_PAGE_SIZE = int(os.getenv('STORE_PAGE_SIZE', '1000'))

# ── Slack notifications ──────────────────────────────────────────────────────
SLACK_WEBHOOK_URL = os.getenv('SLACK_WEBHOOK_URL')

# ── Tables ───────────────────────────────────────────────────────────────────
COMPANIES_TABLE = 'companies'
TEAM_MEMBERS_TABLE = 'team_members'
LEADS_TABLE = 'prospectai'

# ── Scanner ──────────────────────────────────────────────────────────────────
SALESPERSON_ROLE = 'Vendedor'

# Defaults the CRM applies when a salesperson has no stored deadline settings
DEFAULT_DEADLINES = {
    'initial_contact': {
        'minutes': 60,
        'auto_reassign_enabled': False,
        'reassignment_mode': 'random',
        'reassignment_target_id': None,
    },
    'first_feedback': {
        'minutes': 240,
        'auto_reassign_enabled': False,
        'reassignment_mode': 'random',
        'reassignment_target_id': None,
    },
}

SCAN_RUN_TTL = 86400 * 7  # 7 days
