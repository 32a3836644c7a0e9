"""
Well-known pipeline stages.

Companies configure their own funnel, but a few stages carry behavior and are
found by their exact name. The lookup is built once per company per scan so a
renamed stage shows up in the logs instead of silently disabling a rule.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger('scanner.stages')


class WellKnownStage(Enum):
    NEW_LEADS = 'Novos Leads'
    FIRST_ATTEMPT = 'Primeira Tentativa'
    REASSIGNED = 'Remanejados'


def build_stage_lookup(pipeline_stages: Any) -> Dict[WellKnownStage, str]:
    """
    Map each well-known stage to its id in a company's pipeline_stages.

    Names match exactly (case- and accent-sensitive). If a company repeats a
    name, the first occurrence wins.
    """
    by_name = {stage.value: stage for stage in WellKnownStage}
    lookup: Dict[WellKnownStage, str] = {}
    if not isinstance(pipeline_stages, list):
        return lookup

    for entry in pipeline_stages:
        if not isinstance(entry, dict) or not entry.get('id'):
            continue
        stage = by_name.get(entry.get('name'))
        if stage is not None and stage not in lookup:
            lookup[stage] = entry['id']
    return lookup


def resolve_stage(lookup: Dict[WellKnownStage, str], stage: WellKnownStage,
                  company_id: str) -> Optional[str]:
    """Return the stage id, logging when the company has not configured it."""
    stage_id = lookup.get(stage)
    if stage_id is None:
        logger.info("Stage not configured: company=%s stage=%r", company_id, stage.value)
    return stage_id
