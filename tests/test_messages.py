"""Message keys and the English fallback."""

from datetime import date

from mesoplan.messages import option_message, overload_message, readiness_nudge_key, readiness_preview, render
from mesoplan.models import ResolutionAction, ResolutionOption
from mesoplan.periodization import OverloadKind, OverloadSuggestion
from mesoplan.scheduling import ReadinessLevel, session_adjustments


def test_overload_message():
    key, params = overload_message(OverloadSuggestion(OverloadKind.INCREASE_WEIGHT, {'weight': 62.5, 'reps': 6}))
    assert key == 'overload.increaseWeight'
    assert render(key, params) == "62.5kg (back to 6 reps)"


def test_add_rep_message():
    key, params = overload_message(OverloadSuggestion(OverloadKind.ADD_REP, {'target': 12}))
    assert render(key, params) == "+1 rep (target: 12)"


def test_option_message_formats_meta():
    option = ResolutionOption(
        action=ResolutionAction.MERGE,
        label_key='missedDay.merge',
        description_key='missedDay.mergeDesc',
        meta={'merged_muscles': ['quads', 'hamstrings'], 'extra_sets': 7},
    )
    label, desc, params = option_message(option)
    assert label == 'missedDay.merge'
    assert params == {'merged_muscles': 'quads, hamstrings', 'extra_sets': 7}
    assert render(desc, params) == "Add 7 sets for quads, hamstrings to your next workout."


def test_option_message_dates():
    option = ResolutionOption(
        action=ResolutionAction.RESCHEDULE_WEEK,
        label_key='missedDay.reschedule',
        description_key='missedDay.rescheduleDesc',
        meta={'new_date': date(2025, 3, 7)},
    )
    _, desc, params = option_message(option)
    assert params == {'new_date': '2025-03-07'}
    assert "2025-03-07" in render(desc, params)


def test_unknown_key_renders_as_key():
    assert render('missedDay.somethingNew') == 'missedDay.somethingNew'


def test_missing_params_leave_template():
    assert render('missedDay.mergeDesc') == "Add {extra_sets} sets for {merged_muscles} to your next workout."


def test_readiness_nudges():
    for level in ReadinessLevel:
        key = readiness_nudge_key(level)
        assert render(key) != key
    assert readiness_nudge_key(ReadinessLevel.LOW) == 'readiness.nudgeLow'


def test_readiness_preview():
    assert readiness_preview(session_adjustments(90)) is None
    assert readiness_preview(session_adjustments(70)) is None
    assert render(*readiness_preview(session_adjustments(33))) == "Volume -30%, rest +30%, RIR +2"


def test_feedback_reasons_render():
    for key in ('feedback.overreached', 'feedback.fatigue', 'feedback.understimulated'):
        assert render(key) != key
