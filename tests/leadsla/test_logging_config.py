"""Tests for leadsla.logging_config."""
import json
import logging
import sys
from unittest.mock import MagicMock

from leadsla.logging_config import JSONFormatter, configure_logging
from leadsla.scanner.base import Company, Salesperson, LeadRecord
from leadsla.scanner.scanner import run_deadline_scan


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = logging.LogRecord('scanner.scan', logging.ERROR, __file__, 1,
                                   'Write failed for lead %s', ('L1',), sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert entry['level'] == 'ERROR'
    assert entry['logger'] == 'scanner.scan'
    assert entry['message'] == 'Write failed for lead L1'
    assert 'RuntimeError: boom' in entry['exception']


def test_configure_logging_from_env(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    monkeypatch.setenv('LOG_FORMAT', 'json')
    configure_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger('urllib3').level == logging.WARNING


def test_json_formatter_adds_scan_context():
    record = logging.LogRecord('scanner.scan', logging.INFO, __file__, 1, 'Reassigned', (), None)
    record.lead_id = 'L1'
    record.rule = 'initial_contact'
    entry = json.loads(JSONFormatter().format(record))
    assert entry['lead_id'] == 'L1'
    assert entry['rule'] == 'initial_contact'
    assert 'scan_id' not in entry
    assert 'exception' not in entry


def test_scanner_log_lines_carry_lead_context(caplog):
    settings = {'deadlines': {'initial_contact': {
        'minutes': 60, 'auto_reassign_enabled': True,
        'reassignment_mode': 'specific', 'reassignment_target_id': 'b',
    }}}
    store = MagicMock()
    store.list_companies.return_value = [Company('c1', [{'id': 's1', 'name': 'Novos Leads'}])]
    store.list_salespeople.return_value = [Salesperson('a', 'c1', settings), Salesperson('b', 'c1')]
    store.find_overdue_leads.side_effect = lambda sp, *args, **kwargs: [LeadRecord('L1', 'a')] if sp == 'a' else []
    store.reassign_lead.return_value = True

    with caplog.at_level(logging.INFO, logger='scanner.scan'):
        run_deadline_scan(store)

    reassigned = [r for r in caplog.records if r.getMessage().startswith('Reassigned lead L1')]
    assert reassigned[0].lead_id == 'L1'
    assert reassigned[0].salesperson_id == 'a'
    assert reassigned[0].rule == 'initial_contact'
