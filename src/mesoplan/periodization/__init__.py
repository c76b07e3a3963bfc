"""
Periodization Engine

Generates a multi-week periodized program from a user profile:
- Volume ranges per muscle (MV/MEV/MAV/MRV landmarks)
- Weekly volume ramp ending in a deload
- Constrained exercise selection (equipment, limitations, rotation)
- Rep range, rest, RIR and suggested weight per exercise
- Double-progression overload suggestions from logged history
- Feedback-driven set deltas for the following week
"""

from .modifiers import ProfileModifiers, derive_modifiers
from .volume import VolumeCalculator, VolumeRange
from .picker import ExercisePicker
from .assembler import ProgramAssembler, estimate_duration, format_program_text
from .overload import OverloadAdvisor, OverloadKind, OverloadSuggestion
from .feedback import VolumeAdjustment, day_set_deltas, week_feedback, week_feedback_adjustments

__all__ = [
    'ProfileModifiers',
    'derive_modifiers',
    'VolumeCalculator',
    'VolumeRange',
    'ExercisePicker',
    'ProgramAssembler',
    'estimate_duration',
    'format_program_text',
    'OverloadAdvisor',
    'OverloadKind',
    'OverloadSuggestion',
    'VolumeAdjustment',
    'day_set_deltas',
    'week_feedback',
    'week_feedback_adjustments',
]
