"""Tests for leadsla.scanner.stages — well-known stage lookup."""
import logging

from leadsla.scanner.stages import WellKnownStage, build_stage_lookup, resolve_stage


class TestBuildStageLookup:
    """build_stage_lookup() maps well-known stage names to ids."""

    def test_maps_all_well_known_stages(self):
        lookup = build_stage_lookup([
            {'id': 'a', 'name': 'Novos Leads'},
            {'id': 'b', 'name': 'Primeira Tentativa'},
            {'id': 'c', 'name': 'Remanejados'},
            {'id': 'd', 'name': 'Agendado'},
        ])
        assert lookup == {
            WellKnownStage.NEW_LEADS: 'a',
            WellKnownStage.FIRST_ATTEMPT: 'b',
            WellKnownStage.REASSIGNED: 'c',
        }

    def test_name_match_is_case_sensitive(self):
        lookup = build_stage_lookup([{'id': 'a', 'name': 'novos leads'}])
        assert WellKnownStage.NEW_LEADS not in lookup

    def test_name_match_is_accent_and_spacing_sensitive(self):
        lookup = build_stage_lookup([{'id': 'a', 'name': 'Novos  Leads'}, {'id': 'b', 'name': 'Primeira tentativa'}])
        assert lookup == {}

    def test_first_duplicate_wins(self):
        lookup = build_stage_lookup([
            {'id': 'first', 'name': 'Novos Leads'},
            {'id': 'second', 'name': 'Novos Leads'},
        ])
        assert lookup[WellKnownStage.NEW_LEADS] == 'first'

    def test_ignores_malformed_entries(self):
        lookup = build_stage_lookup(['Novos Leads', None, {'name': 'Novos Leads'}, {'id': 'x', 'name': 'Novos Leads'}])
        assert lookup == {WellKnownStage.NEW_LEADS: 'x'}

    def test_non_list_returns_empty(self):
        assert build_stage_lookup(None) == {}
        assert build_stage_lookup({'id': 'a', 'name': 'Novos Leads'}) == {}


class TestResolveStage:
    """resolve_stage() returns the id or logs a missing stage."""

    def test_returns_configured_id(self):
        lookup = {WellKnownStage.NEW_LEADS: 'a'}
        assert resolve_stage(lookup, WellKnownStage.NEW_LEADS, 'company-1') == 'a'

    def test_missing_stage_returns_none_and_logs(self, caplog):
        with caplog.at_level(logging.INFO, logger='scanner.stages'):
            assert resolve_stage({}, WellKnownStage.FIRST_ATTEMPT, 'company-1') is None
        assert 'Stage not configured' in caplog.text
        assert 'Primeira Tentativa' in caplog.text

    def test_missing_stage_is_not_an_error(self, caplog):
        with caplog.at_level(logging.INFO, logger='scanner.stages'):
            resolve_stage({}, WellKnownStage.NEW_LEADS, 'company-1')
        assert all(r.levelno < logging.WARNING for r in caplog.records)
