"""
Deadline rules and per-salesperson deadline settings.

Two independent SLA clocks exist: "lead arrived" (initial contact) and
"prospecting started" (first feedback). Each has its own threshold, enable
flag and reassignment policy.
"""
import copy
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from leadsla.config import DEFAULT_DEADLINES
from leadsla.scanner.stages import WellKnownStage


class InvalidDeadlineConfig(ValueError):
    """A stored deadline setting cannot be interpreted."""


class ReassignmentMode(Enum):
    RANDOM = 'random'
    SPECIFIC = 'specific'


@dataclass(frozen=True)
class DeadlineRule:
    key: str                   # settings key under prospect_ai_settings.deadlines
    stage: WellKnownStage      # stage the lead must currently be in
    clock_field: str           # lead timestamp the deadline is measured from
    require_no_feedback: bool  # only leads with no feedback logged yet
    reason: str                # written to details.reason


INITIAL_CONTACT = DeadlineRule(
    key='initial_contact',
    stage=WellKnownStage.NEW_LEADS,
    clock_field='created_at',
    require_no_feedback=False,
    reason='Initial contact deadline missed.',
)

FIRST_FEEDBACK = DeadlineRule(
    key='first_feedback',
    stage=WellKnownStage.FIRST_ATTEMPT,
    clock_field='prospected_at',
    require_no_feedback=True,
    reason='First feedback deadline missed.',
)

DEADLINE_RULES = (INITIAL_CONTACT, FIRST_FEEDBACK)


@dataclass
class DeadlineConfig:
    minutes: float
    auto_reassign_enabled: bool = False
    reassignment_mode: ReassignmentMode = ReassignmentMode.RANDOM
    reassignment_target_id: Optional[str] = None


_MINUTES_KEYS = ('minutes', 'minutes_threshold', 'minutesThreshold')

# Ten years; longer thresholds are a misconfiguration
MAX_DEADLINE_MINUTES = 60 * 24 * 365 * 10


def _parse_config(key: str, raw: Dict[str, Any]) -> DeadlineConfig:
    minutes = None
    for name in _MINUTES_KEYS:
        if raw.get(name) is not None:
            minutes = raw[name]
            break

    # bool is an int subclass; a stray true/false is not a threshold
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        raise InvalidDeadlineConfig(f"{key}: minutes must be a number, got {minutes!r}")
    if not math.isfinite(minutes):
        raise InvalidDeadlineConfig(f"{key}: minutes must be finite, got {minutes!r}")
    if minutes < 0:
        raise InvalidDeadlineConfig(f"{key}: minutes must not be negative, got {minutes!r}")
    if minutes > MAX_DEADLINE_MINUTES:
        raise InvalidDeadlineConfig(f"{key}: minutes must be at most {MAX_DEADLINE_MINUTES}, got {minutes!r}")

    try:
        mode = ReassignmentMode(raw.get('reassignment_mode'))
    except ValueError:
        mode = ReassignmentMode.RANDOM

    return DeadlineConfig(
        minutes=minutes,
        auto_reassign_enabled=bool(raw.get('auto_reassign_enabled')),
        reassignment_mode=mode,
        reassignment_target_id=raw.get('reassignment_target_id') or None,
    )


def parse_deadline(prospect_ai_settings: Optional[Dict[str, Any]], key: str) -> DeadlineConfig:
    """
    Build the DeadlineConfig for one rule key.

    Stored values are layered over DEFAULT_DEADLINES the same way the CRM
    screens do, so a salesperson who never saved settings gets the disabled
    defaults. Raises InvalidDeadlineConfig for an unusable threshold.
    """
    merged = copy.deepcopy(DEFAULT_DEADLINES.get(key, {}))
    settings = prospect_ai_settings if isinstance(prospect_ai_settings, dict) else {}
    deadlines = settings.get('deadlines')
    if isinstance(deadlines, dict) and isinstance(deadlines.get(key), dict):
        stored = {k: v for k, v in deadlines[key].items() if v is not None}
        # an explicit minutes alias replaces the default threshold
        if any(stored.get(name) is not None for name in _MINUTES_KEYS):
            merged.pop('minutes', None)
        merged.update(stored)
    return _parse_config(key, merged)
