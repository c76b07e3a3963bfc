"""
Schedule Reconciler

Detects missed scheduled days, classifies the situation (days since last
session, week position, mesocycle phase, recovery of the missed muscles),
offers resolution options and executes the one the user picks.

States:
    clean    no missed days, compute_resolution returns None
    pending  missed days found, a MissedDayResolution awaits a choice
    resolved the chosen action rewrote the schedule; next run is clean

Nothing here resolves on its own; execute() only runs on an explicit action.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Sequence, Set

from ..catalog import DEFAULT_CATALOG, ExerciseCatalog
from ..config import MesoplanConfig
from ..landmarks import RECOVERY_HOURS, VOLUME_LANDMARKS, RecoveryWindow, VolumeLandmarks
from ..models import (
    ActiveProgramState,
    MesocyclePhase,
    MissedDayResolution,
    MuscleRecovery,
    ProgramExercise,
    ProgramSchedule,
    RecoveryStatus,
    ResolutionAction,
    ResolutionOption,
    ResolutionResult,
    ScheduledDay,
    Severity,
    SkipReason,
    TrainingProgram,
    WeekContext,
    WorkoutSession,
)
from .dates import days_between, monday_of, next_preferred_day
from .engine import find_index, pending_merged_days, walk_days

logger = logging.getLogger(__name__)


NEVER_TRAINED_HOURS = 999.0


def detect_missed_days(schedule: ProgramSchedule, today: Optional[date] = None) -> List[ScheduledDay]:
    """Days planned before today with neither a completion nor a skip."""
    today = today or date.today()
    return [sd for sd in schedule.scheduled_days if sd.is_missed(today)]


def classify_week_context(completed_in_week: int, days_in_week: int) -> WeekContext:
    ratio = completed_in_week / days_in_week if days_in_week else 0
    if ratio < 0.33:
        return WeekContext.EARLY
    if ratio < 0.67:
        return WeekContext.MID
    return WeekContext.LATE


class ScheduleReconciler:
    """
    Missed-day detection, option generation and resolution execution.

    Catalog, landmark table, recovery table and config are injected.
    """

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        landmarks: Optional[Dict[str, VolumeLandmarks]] = None,
        recovery_hours: Optional[Dict[str, RecoveryWindow]] = None,
        config: Optional[MesoplanConfig] = None
    ):
        """
        Initialize reconciler.

        Args:
            catalog: Exercise catalog (maps logged exercises to muscles)
            landmarks: Volume landmark table (merge MRV check)
            recovery_hours: Per-muscle recovery thresholds
            config: Engine config
        """
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.landmarks = landmarks if landmarks is not None else VOLUME_LANDMARKS
        self.recovery_hours = recovery_hours if recovery_hours is not None else RECOVERY_HOURS
        self.config = config or MesoplanConfig()

    # ─── Context ───

    def weekly_sets(self, history: Sequence[WorkoutSession], today: date) -> Dict[str, int]:
        """Completed sets per muscle in the Mon-Sun week containing today."""
        start = monday_of(today)
        end = start + timedelta(days=6)
        result: Dict[str, int] = {}

        for session in history:
            if session.end_time is None:
                continue
            if not start <= session.start_time.date() <= end:
                continue

            for ex in session.completed_exercises:
                muscle = self.catalog.muscle_for(ex.exercise_id)
                if muscle is None:
                    continue
                done = sum(1 for s in ex.sets if s.completed)
                result[muscle] = result.get(muscle, 0) + done

        return result

    def muscle_recovery(
        self,
        muscles: Sequence[str],
        history: Sequence[WorkoutSession],
        today: date
    ) -> List[MuscleRecovery]:
        """
        Recovery status of each muscle as of the start of today.

        A muscle no finished session has touched counts as never trained
        (999 hours) and is fresh.
        """
        midnight = datetime.combine(today, time())
        result = []

        for muscle in muscles:
            last_trained: Optional[datetime] = None
            for session in history:
                if session.end_time is None:
                    continue
                if last_trained is not None and session.start_time <= last_trained:
                    continue
                for ex in session.completed_exercises:
                    if self.catalog.muscle_for(ex.exercise_id) == muscle and any(s.completed for s in ex.sets):
                        last_trained = session.start_time
                        break

            if last_trained is None:
                hours = NEVER_TRAINED_HOURS
            else:
                hours = (midnight - last_trained).total_seconds() / 3600

            window = self.recovery_hours.get(muscle)
            if window is None or hours >= NEVER_TRAINED_HOURS:
                status = RecoveryStatus.FRESH
            elif hours < window.fatigued:
                status = RecoveryStatus.FATIGUED
            elif hours <= window.fresh_max:
                status = RecoveryStatus.FRESH
            else:
                status = RecoveryStatus.UNDERTRAINED

            can_train = (
                status is not RecoveryStatus.FATIGUED
                or window is None
                or hours >= window.fresh_min
            )

            result.append(MuscleRecovery(muscle, hours, status, can_train))

        return result

    def severity(self, missed_count: int, days_since_last: int) -> Severity:
        cfg = self.config
        if missed_count >= cfg.urgent_missed_count or days_since_last >= cfg.urgent_days:
            return Severity.URGENT
        if missed_count >= cfg.warning_missed_count or days_since_last >= cfg.warning_days:
            return Severity.WARNING
        return Severity.INFO

    def nudge_key(
        self,
        missed_count: int,
        days_since_last: int,
        phase: MesocyclePhase,
        severity: Severity
    ) -> str:
        if phase is MesocyclePhase.DELOAD:
            return 'missedDay.nudgeDeload'
        if severity is Severity.URGENT:
            return 'missedDay.nudgeUrgent'
        if days_since_last >= self.config.long_break_days:
            return 'missedDay.nudgeLongBreak'
        if missed_count >= 2:
            return 'missedDay.nudgeMultiple'
        return 'missedDay.nudgeSingle'

    # ─── Detection ───

    def compute_resolution(
        self,
        program: TrainingProgram,
        state: ActiveProgramState,
        history: Sequence[WorkoutSession],
        today: Optional[date] = None
    ) -> Optional[MissedDayResolution]:
        """
        Build the pending resolution for the current schedule.

        Args:
            program: Active program
            state: Active program state (needs a schedule)
            history: Workout sessions, most recent first
            today: Reference date (default: date.today())

        Returns:
            MissedDayResolution, or None when nothing is missed
        """
        if state.schedule is None:
            return None

        today = today or date.today()
        schedule = state.schedule
        missed = detect_missed_days(schedule, today)
        if not missed:
            return None

        last = state.last_completed_at or state.start_date
        days_since_last = days_between(last, today)

        week_number = missed[0].week_number
        week = program.week(week_number)
        days_in_week = len(week.days) if week else 3
        completed_in_week = sum(
            1 for sd in schedule.scheduled_days
            if sd.week_number == week_number and sd.completed_date is not None
        )
        week_context = classify_week_context(completed_in_week, days_in_week)

        if week is not None and week.is_deload:
            phase = MesocyclePhase.DELOAD
        elif week_number >= program.total_weeks - 1:
            phase = MesocyclePhase.PEAK
        else:
            phase = MesocyclePhase.RAMP

        missed_muscles = self._day_muscles(program, missed)
        recovery = self.muscle_recovery(missed_muscles, history, today)
        severity = self.severity(len(missed), days_since_last)

        options = self.generate_options(
            missed, program, schedule,
            self.weekly_sets(history, today), recovery,
            phase, week_context, days_since_last, today
        )

        resolution = MissedDayResolution(
            missed_days=tuple(missed),
            days_since_last=days_since_last,
            week_context=week_context,
            mesocycle_phase=phase,
            severity=severity,
            options=tuple(options),
            nudge_key=self.nudge_key(len(missed), days_since_last, phase, severity),
            muscle_recovery=tuple(recovery),
        )

        logger.info(
            f"{len(missed)} missed day(s), {days_since_last} days since last session, "
            f"severity {severity.value}"
        )
        return resolution

    @staticmethod
    def _day_muscles(program: TrainingProgram, days: Sequence[ScheduledDay]) -> List[str]:
        muscles: List[str] = []
        for sd in days:
            day = program.day(sd.week_number, sd.day_index)
            if day is None:
                continue
            for m in day.muscle_targets:
                if m not in muscles:
                    muscles.append(m)
        return muscles

    # ─── Options ───

    def generate_options(
        self,
        missed: Sequence[ScheduledDay],
        program: TrainingProgram,
        schedule: ProgramSchedule,
        weekly_sets: Dict[str, int],
        recovery: Sequence[MuscleRecovery],
        phase: MesocyclePhase,
        week_context: WeekContext,
        days_since_last: int,
        today: date
    ) -> List[ResolutionOption]:
        """
        Feasible resolution options, exactly one recommended.

        Merge, when its own criteria hold, takes the recommendation ahead of
        doing the missed day.
        """
        cfg = self.config
        options: List[ResolutionOption] = []
        all_recovered = all(m.can_train_today for m in recovery)
        is_deload = phase is MesocyclePhase.DELOAD
        is_late = week_context is WeekContext.LATE

        merge_option = self._merge_option(missed, program, schedule, weekly_sets, all_recovered, is_deload, today)
        merge_recommended = (
            merge_option is not None
            and len(missed) == 1
            and not is_late
            and days_since_last <= cfg.merge_recommend_max_days
        )

        if len(missed) == 1 and all_recovered and days_since_last <= cfg.do_missed_max_days:
            options.append(ResolutionOption(
                action=ResolutionAction.DO_MISSED,
                label_key='missedDay.doMissed',
                description_key='missedDay.doMissedDesc',
                recommended=not is_deload and not is_late and not merge_recommended,
            ))

        if is_deload:
            skip_desc = 'missedDay.skipDeloadDesc'
        elif len(missed) >= 3:
            skip_desc = 'missedDay.skipMultipleDesc'
        else:
            skip_desc = 'missedDay.skipContinueDesc'

        options.append(ResolutionOption(
            action=ResolutionAction.SKIP_CONTINUE,
            label_key='missedDay.skipContinue',
            description_key=skip_desc,
            recommended=is_deload or len(missed) >= 3 or (is_late and len(missed) >= 2),
        ))

        if merge_option is not None:
            claimed = any(o.recommended for o in options)
            options.append(replace(merge_option, recommended=merge_recommended and not claimed))

        if len(missed) <= 2 and not is_deload:
            next_date = next_preferred_day(today + timedelta(days=1), schedule.preferred_days)
            if days_between(today, next_date) <= cfg.reschedule_window_days:
                claimed = any(o.recommended for o in options)
                options.append(ResolutionOption(
                    action=ResolutionAction.RESCHEDULE_WEEK,
                    label_key='missedDay.reschedule',
                    description_key='missedDay.rescheduleDesc',
                    recommended=not claimed and week_context is WeekContext.EARLY,
                    meta={'new_date': next_date},
                ))

        return self._enforce_single_recommendation(options)

    def _merge_option(
        self,
        missed: Sequence[ScheduledDay],
        program: TrainingProgram,
        schedule: ProgramSchedule,
        weekly_sets: Dict[str, int],
        all_recovered: bool,
        is_deload: bool,
        today: date
    ) -> Optional[ResolutionOption]:
        """Merge option if feasible (recommended flag left unset)."""
        cfg = self.config
        if len(missed) > 2 or is_deload or not all_recovered:
            return None

        missed_muscles = self._day_muscles(program, missed)
        missed_sets = 0
        for sd in missed:
            day = program.day(sd.week_number, sd.day_index)
            if day is not None:
                missed_sets += day.total_sets

        next_sd = self._next_open_day(schedule, missed, today)
        next_day = program.day(next_sd.week_number, next_sd.day_index) if next_sd else None
        next_sets = next_day.total_sets if next_day else 0

        if missed_sets + next_sets > cfg.merge_max_session_sets:
            logger.debug(f"Merge infeasible: {missed_sets + next_sets} sets in one session")
            return None

        merged: Set[str] = set(missed_muscles)
        if next_day is not None:
            merged |= set(next_day.muscle_targets)

        for muscle in merged:
            lm = self.landmarks.get(muscle)
            if lm is not None and weekly_sets.get(muscle, 0) + cfg.merge_mrv_headroom > lm.mrv:
                logger.debug(f"Merge infeasible: {muscle} would pass MRV")
                return None

        return ResolutionOption(
            action=ResolutionAction.MERGE,
            label_key='missedDay.merge',
            description_key='missedDay.mergeDesc',
            meta={'merged_muscles': missed_muscles, 'extra_sets': missed_sets},
        )

    @staticmethod
    def _next_open_day(
        schedule: ProgramSchedule,
        excluded: Sequence[ScheduledDay],
        today: date
    ) -> Optional[ScheduledDay]:
        keys = {sd.key for sd in excluded}
        for sd in schedule.scheduled_days:
            if not sd.is_done and sd.key not in keys and sd.planned_date >= today:
                return sd
        return None

    @staticmethod
    def _enforce_single_recommendation(options: List[ResolutionOption]) -> List[ResolutionOption]:
        """At least one and at most one recommended option."""
        if options and not any(o.recommended for o in options):
            logger.debug("No option qualified, recommending skip_continue")
            idx = next(
                (i for i, o in enumerate(options) if o.action is ResolutionAction.SKIP_CONTINUE),
                0,
            )
            options[idx] = replace(options[idx], recommended=True)

        found = False
        for i, opt in enumerate(options):
            if opt.recommended:
                if found:
                    options[i] = replace(opt, recommended=False)
                found = True

        return options

    # ─── Execution ───

    def execute(
        self,
        action: ResolutionAction,
        resolution: MissedDayResolution,
        state: ActiveProgramState,
        today: Optional[date] = None
    ) -> ResolutionResult:
        """
        Apply the chosen action to the schedule.

        Args:
            action: User's choice
            resolution: The pending resolution it was chosen from
            state: Active program state
            today: Reference date (default: date.today())

        Returns:
            ResolutionResult with the rewritten schedule and where to advance
        """
        schedule = state.schedule
        if schedule is None:
            return ResolutionResult(schedule=None)

        today = today or date.today()
        days = list(schedule.scheduled_days)

        if action is ResolutionAction.DO_MISSED:
            first = resolution.missed_days[0]
            idx = find_index(schedule, first.week_number, first.day_index)
            if idx == -1:
                logger.debug(f"Missed day {first.key} no longer in schedule")
                return ResolutionResult(schedule=schedule)

            days[idx] = replace(days[idx], planned_date=today)
            days = walk_days(
                days, idx + 1, today + timedelta(days=1),
                first.week_number, schedule.preferred_days
            )
            result = ResolutionResult(
                schedule=replace(schedule, scheduled_days=tuple(days)),
                advance_to_week=first.week_number,
                advance_to_day_index=first.day_index,
            )

        else:
            if action in (ResolutionAction.SKIP_CONTINUE, ResolutionAction.MERGE):
                reason = SkipReason.MERGED if action is ResolutionAction.MERGE else SkipReason.USER_SKIP
                keys = {sd.key for sd in resolution.missed_days}
                days = [
                    replace(sd, skipped_date=today, skipped_reason=reason) if sd.key in keys else sd
                    for sd in days
                ]

            days = self._reflow_from(days, today, schedule.preferred_days)
            next_sd = next((sd for sd in days if not sd.is_done), None)
            result = ResolutionResult(
                schedule=replace(schedule, scheduled_days=tuple(days)),
                advance_to_week=next_sd.week_number if next_sd else None,
                advance_to_day_index=next_sd.day_index if next_sd else None,
            )

        logger.info(f"Executed {action.value} for {len(resolution.missed_days)} missed day(s)")
        return result

    @staticmethod
    def _reflow_from(days: List[ScheduledDay], today: date, preferred_days) -> List[ScheduledDay]:
        """Walk every open day from today, starting in the first open day's week."""
        first = next((i for i, sd in enumerate(days) if not sd.is_done), None)
        if first is None:
            return days
        return walk_days(days, first, today, days[first].week_number, preferred_days)

    def get_merged_exercises(self, program: TrainingProgram, schedule: ProgramSchedule) -> List[ProgramExercise]:
        """
        Exercises carried over from merged days, sets capped per exercise.

        Only merged days no completed session has absorbed yet count; the
        next completion stamps them (see mark_day_completed).

        Args:
            program: Active program
            schedule: Current schedule

        Returns:
            Extra exercises for the next session
        """
        extra: List[ProgramExercise] = []
        for sd in pending_merged_days(schedule):
            day = program.day(sd.week_number, sd.day_index)
            if day is None:
                continue
            for ex in day.exercises:
                extra.append(replace(ex, sets=min(ex.sets, self.config.merged_set_cap)))
        return extra
