"""
Mesoplan: periodized training programs and schedule reconciliation.

Two engines:
- periodization: profile -> multi-week program with volume ramp and deload
- scheduling: program -> calendar, kept valid as sessions get missed
"""

from .config import MesoplanConfig
from .catalog import DEFAULT_CATALOG, Exercise, ExerciseCatalog
from .periodization import OverloadAdvisor, ProgramAssembler
from .scheduling import ScheduleReconciler

__version__ = "0.1.0"

__all__ = [
    'MesoplanConfig',
    'DEFAULT_CATALOG',
    'Exercise',
    'ExerciseCatalog',
    'OverloadAdvisor',
    'ProgramAssembler',
    'ScheduleReconciler',
]
