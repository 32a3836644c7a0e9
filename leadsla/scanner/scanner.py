"""
Deadline scanner — finds overdue Farm leads and hands them to another salesperson.

For every salesperson with role 'Vendedor':
  1. Resolve the company's well-known stages (skip if it has no pipeline)
  2. Build the candidate pool: every other Vendedor of the same company
  3. For each enabled rule, fetch the leads past their deadline and
     reassign each one with a conditional write on the current owner

Read failures for one rule and write failures for one lead are logged and
the scan moves on. Only failing to load companies or salespeople aborts it.
"""
import logging
import random
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Set

from leadsla.config import SALESPERSON_ROLE
from leadsla.scanner.base import RowStore, Salesperson, ScanResult, Reassignment
from leadsla.scanner.rules import (
    DEADLINE_RULES, DeadlineRule, DeadlineConfig, ReassignmentMode,
    InvalidDeadlineConfig, parse_deadline,
)
from leadsla.scanner.stages import build_stage_lookup, resolve_stage

logger = logging.getLogger('scanner.scan')


def build_audit_details(details: Optional[Dict[str, Any]], from_id: str, to_id: str,
                        reason: str, now: datetime) -> Dict[str, Any]:
    """Merge the system reassignment record into a lead's existing details."""
    merged = dict(details or {})
    merged.update({
        'reassigned_by_system': True,
        'reassigned_from': from_id,
        'reassigned_to': to_id,
        'reassigned_at': now.isoformat(),
        'reason': reason,
    })
    return merged


def resolve_target(config: DeadlineConfig, pool_ids: List[str],
                   current_owner_id: str, rng=random) -> Optional[str]:
    """
    Pick the new owner for one overdue lead, or None if there is nothing to do.

    Random mode draws independently for every lead, so one run may hand
    several leads to the same salesperson.
    """
    if not pool_ids:
        return None

    if config.reassignment_mode is ReassignmentMode.SPECIFIC:
        target = config.reassignment_target_id
        if target and target not in pool_ids and target != current_owner_id:
            logger.info("Reassignment target %s is not a salesperson of this company", target)
            return None
    else:
        target = rng.choice(pool_ids)

    if not target or target == current_owner_id:
        return None
    return target


def _load_config(salesperson: Salesperson, rule: DeadlineRule) -> Optional[DeadlineConfig]:
    """Return the rule's config if auto-reassignment is enabled and usable."""
    try:
        config = parse_deadline(salesperson.prospect_ai_settings, rule.key)
    except InvalidDeadlineConfig as e:
        logger.warning("Skipping %s for salesperson %s: %s", rule.key, salesperson.id, e)
        return None
    return config if config.auto_reassign_enabled else None


def _apply_rule(store: RowStore, rule: DeadlineRule, config: DeadlineConfig,
                salesperson: Salesperson, stage_id: str, pool_ids: List[str],
                now: datetime, rng, result: ScanResult, moved: Set[str]):
    context = {'salesperson_id': salesperson.id, 'rule': rule.key}
    try:
        cutoff = now - timedelta(minutes=config.minutes)
    except (OverflowError, ValueError):
        logger.warning("Skipping %s for salesperson %s: threshold %r is out of range",
                       rule.key, salesperson.id, config.minutes, extra=context)
        return

    try:
        leads = store.find_overdue_leads(
            salesperson.id, stage_id, rule.clock_field, cutoff,
            require_no_feedback=rule.require_no_feedback,
        )
    except Exception as e:
        logger.error("Error fetching overdue %s leads for salesperson %s",
                     rule.key, salesperson.id, exc_info=True, extra=context)
        result.add_error('rule', str(e), salesperson_id=salesperson.id, rule=rule.key)
        return

    for lead in leads:
        if lead.id in moved:
            # Already handed over earlier in this run
            result.skipped += 1
            continue

        lead_context = dict(context, lead_id=lead.id)
        owner_id = lead.salesperson_id
        target_id = resolve_target(config, pool_ids, owner_id, rng)
        if target_id is None:
            result.skipped += 1
            continue

        details = build_audit_details(lead.details, owner_id, target_id, rule.reason, now)
        try:
            applied = store.reassign_lead(lead.id, owner_id, target_id, details)
        except Exception as e:
            logger.error("Error reassigning %s lead %s", rule.key, lead.id, exc_info=True, extra=lead_context)
            result.add_error('lead', str(e), lead_id=lead.id, rule=rule.key)
            continue

        if not applied:
            # Someone else moved the lead after we read it
            logger.info("Lead %s no longer owned by %s, left as is", lead.id, owner_id, extra=lead_context)
            result.conflicts += 1
            continue

        moved.add(lead.id)
        result.reassigned += 1
        result.reassignments.append(Reassignment(
            lead_id=lead.id,
            from_id=owner_id,
            to_id=target_id,
            rule=rule.key,
            reassigned_at=details['reassigned_at'],
        ))
        logger.info("Reassigned lead %s from %s to %s (%s)", lead.id, owner_id, target_id, rule.key,
                    extra=lead_context)


def run_deadline_scan(store: RowStore, now: datetime = None, rng=None) -> ScanResult:
    """
    Run one full scan over every company and salesperson.

    Args:
        store: RowStore to read leads from and write reassignments to.
        now:   Reference time for all deadlines (default: current UTC time).
        rng:   Anything with .choice(); defaults to the random module.

    Raises whatever the store raises while loading companies or salespeople.
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random

    companies = store.list_companies()
    salespeople = store.list_salespeople(SALESPERSON_ROLE)

    stage_lookups = {
        company.id: build_stage_lookup(company.pipeline_stages)
        for company in companies
        if isinstance(company.pipeline_stages, list)
    }

    team_by_company = defaultdict(list)
    for salesperson in salespeople:
        team_by_company[salesperson.company_id].append(salesperson.id)

    result = ScanResult()
    moved: Set[str] = set()
    logger.info("Scanning %d salespeople across %d companies", len(salespeople), len(companies))

    for salesperson in salespeople:
        lookup = stage_lookups.get(salesperson.company_id)
        if lookup is None:
            logger.debug("Salesperson %s: company %s has no pipeline", salesperson.id, salesperson.company_id)
            continue

        pool_ids = [sp_id for sp_id in team_by_company[salesperson.company_id] if sp_id != salesperson.id]
        if not pool_ids:
            logger.debug("Salesperson %s has no teammates to reassign to", salesperson.id)
            continue

        for rule in DEADLINE_RULES:
            config = _load_config(salesperson, rule)
            if config is None:
                continue
            stage_id = resolve_stage(lookup, rule.stage, salesperson.company_id)
            if stage_id is None:
                continue
            _apply_rule(store, rule, config, salesperson, stage_id, pool_ids, now, rng, result, moved)

    logger.info("Scan finished: reassigned=%d conflicts=%d skipped=%d errors=%d",
                result.reassigned, result.conflicts, result.skipped, len(result.errors))
    return result
