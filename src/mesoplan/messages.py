"""
Message Adapter

The engines emit decisions (tagged suggestions, option keys); this module
maps them to message keys plus interpolation params. Rendering proper
belongs to the UI layer; ENGLISH is only a fallback used by the CLI.
"""

from datetime import date
from typing import Any, Dict, Optional, Tuple

from .models import ResolutionOption
from .periodization.overload import OverloadKind, OverloadSuggestion
from .scheduling.readiness import ReadinessLevel, SessionAdjustments


OVERLOAD_KEYS: Dict[OverloadKind, str] = {
    OverloadKind.DECREASE_WEIGHT: 'overload.decreaseWeight',
    OverloadKind.INCREASE_WEIGHT: 'overload.increaseWeight',
    OverloadKind.ADD_REP: 'overload.addRep',
}

ENGLISH: Dict[str, str] = {
    'overload.decreaseWeight': "Drop to {weight:g}kg",
    'overload.increaseWeight': "{weight:g}kg (back to {reps} reps)",
    'overload.addRep': "+1 rep (target: {target})",

    'missedDay.nudgeDeload': "Missed a deload session. No stress, recovery is the point this week.",
    'missedDay.nudgeUrgent': "It's been a while. Let's get you back on track gently.",
    'missedDay.nudgeLongBreak': "Over a week off. Ease back in.",
    'missedDay.nudgeMultiple': "A few sessions slipped. Pick how to catch up.",
    'missedDay.nudgeSingle': "You missed a session. Pick how to handle it.",

    'missedDay.doMissed': "Do the missed workout today",
    'missedDay.doMissedDesc': "Train the missed day now and push the rest forward.",
    'missedDay.skipContinue': "Skip and continue",
    'missedDay.skipContinueDesc': "Drop the missed day and carry on with the plan.",
    'missedDay.skipDeloadDesc': "Deload sessions are optional; carry on.",
    'missedDay.skipMultipleDesc': "Too many days to catch up; restart from the next session.",
    'missedDay.merge': "Merge into next session",
    'missedDay.mergeDesc': "Add {extra_sets} sets for {merged_muscles} to your next workout.",
    'missedDay.reschedule': "Reschedule the week",
    'missedDay.rescheduleDesc': "Shift the remaining sessions, next one on {new_date}.",

    'readiness.nudgePeak': "Fully charged. Go after it today.",
    'readiness.nudgeGood': "Good to go. Train as planned.",
    'readiness.nudgeModerate': "A bit flat today. The session has been eased off.",
    'readiness.nudgeLow': "Low readiness. Lighter session, focus on clean reps.",
    'readiness.adjustmentPreview': "Volume {volume}, rest {rest}, RIR {rir}",

    'feedback.overreached': "High fatigue and dropping performance: cut volume to recover.",
    'feedback.fatigue': "Soreness is lingering: trim volume slightly.",
    'feedback.understimulated': "Recovering well with little pump: add volume.",
}


def overload_message(suggestion: OverloadSuggestion) -> Tuple[str, Dict[str, Any]]:
    """Message key and params for an overload suggestion."""
    return OVERLOAD_KEYS[suggestion.kind], dict(suggestion.params)


def option_message(option: ResolutionOption) -> Tuple[str, str, Dict[str, Any]]:
    """Label key, description key and params for a resolution option."""
    params: Dict[str, Any] = {}
    for k, v in option.meta.items():
        if isinstance(v, date):
            params[k] = v.isoformat()
        elif isinstance(v, (list, tuple)):
            params[k] = ", ".join(str(x) for x in v)
        else:
            params[k] = v
    return option.label_key, option.description_key, params


def render(key: str, params: Optional[Dict[str, Any]] = None) -> str:
    """English text for a key; unknown keys render as the key itself."""
    template = ENGLISH.get(key)
    if template is None:
        return key
    try:
        return template.format(**(params or {}))
    except KeyError:
        return template


def readiness_nudge_key(level: ReadinessLevel) -> str:
    return f"readiness.nudge{level.value.capitalize()}"


def readiness_preview(adjustments: SessionAdjustments) -> Optional[Tuple[str, Dict[str, Any]]]:
    """Key and params summarising a readiness adjustment; None when nothing changes."""
    if not adjustments.changes_session:
        return None
    return 'readiness.adjustmentPreview', {
        'volume': f"-{round((1 - adjustments.volume_multiplier) * 100)}%",
        'rest': f"+{round((adjustments.rest_multiplier - 1) * 100)}%",
        'rir': f"+{adjustments.rir_delta}",
    }
