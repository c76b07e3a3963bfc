#!/usr/bin/env python3
"""
Mesoplan CLI

Command-line front end for program generation and schedule reconciliation.

Usage:
    mesoplan plan PROFILE
    mesoplan schedule SNAPSHOT
    mesoplan today SNAPSHOT
    mesoplan reconcile SNAPSHOT
    mesoplan resolve SNAPSHOT --action {do_missed,skip_continue,merge,reschedule_week} [--save]
    mesoplan feedback SNAPSHOT [--week N]
"""

import logging
import sys
from dataclasses import replace
from datetime import datetime, time
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml

from mesoplan.config import MesoplanConfig
from mesoplan.landmarks import VOLUME_LANDMARKS, volume_zone
from mesoplan.loaders import Snapshot, append_resolution, load_profile, load_snapshot
from mesoplan.messages import (
    option_message,
    overload_message,
    readiness_nudge_key,
    readiness_preview,
    render,
)
from mesoplan.models import ActiveProgramState, ResolutionAction, TrainingProgram
from mesoplan.periodization import (
    OverloadAdvisor,
    ProgramAssembler,
    day_set_deltas,
    format_program_text,
    week_feedback,
    week_feedback_adjustments,
)
from mesoplan.periodization.weights import last_logged_weight, last_session_e1rm
from mesoplan.scheduling import (
    ScheduleReconciler,
    apply_readiness,
    apply_resolution,
    default_preferred_days,
    flatten_program_day,
    format_schedule_text,
    mark_day_completed,
    next_scheduled_day,
    readiness_score,
    reconcile as reconcile_state,
    session_adjustments,
    start_program,
)

logger = logging.getLogger(__name__)

ACTIONS = [a.value for a in ResolutionAction]

COMPLETION, RESOLUTION = 0, 1


def _restore(snapshot: Snapshot, config: MesoplanConfig) -> Tuple[TrainingProgram, ActiveProgramState]:
    """
    Regenerate the program and replay the snapshot onto a fresh schedule.

    Completions and applied resolutions are replayed in date order, with
    completions first on a shared date. Each resolution is re-executed
    against what reconciliation would have shown on the day it was chosen.
    """
    assembler = ProgramAssembler(config=config)
    program = assembler.generate(
        snapshot.profile,
        now=datetime.combine(snapshot.start_date, time()),
        has_history=bool(snapshot.history),
    )

    preferred = snapshot.preferred_days or default_preferred_days(snapshot.profile.days_per_week)
    state = start_program(program, snapshot.start_date, preferred)
    reconciler = ScheduleReconciler(config=config)
    history = list(snapshot.history)

    events = sorted(
        [(rec.completed_on, COMPLETION, i, rec) for i, rec in enumerate(snapshot.completed)]
        + [(rec.applied_on, RESOLUTION, i, rec) for i, rec in enumerate(snapshot.resolutions)],
        key=lambda e: e[:3],
    )

    for on, kind, _, rec in events:
        if kind == COMPLETION:
            state = mark_day_completed(program, state, rec.week_number, rec.day_index, on)
            continue

        seen = [s for s in history if s.start_time.date() <= on]
        state = reconcile_state(program, state, seen, reconciler, on)
        pending = state.pending_resolution
        if pending is None or rec.action not in [o.action for o in pending.options]:
            logger.warning(f"Recorded {rec.action.value} on {on.isoformat()} no longer applies, ignoring")
            state = replace(state, pending_resolution=None)
            continue
        state = apply_resolution(state, rec.action, reconciler, on)

    return program, state


def _fail(message: str):
    click.echo(f"❌ {message}")
    sys.exit(1)


def _load(snapshot_path: Path) -> Optional[Snapshot]:
    try:
        return load_snapshot(snapshot_path)
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"Invalid snapshot: {e}")
        return None


@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Engine config YAML (default: config/mesoplan.yaml or $MESOPLAN_CONFIG)')
@click.pass_context
def cli(ctx, config_path: Optional[Path]):
    """
    Mesoplan - mesocycle programs that keep up with real life.
    """
    config = MesoplanConfig.from_yaml(config_path)
    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    ctx.obj = config


@cli.command()
@click.argument('profile_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def plan(config: MesoplanConfig, profile_path: Path):
    """Generate a full program for a profile."""
    try:
        profile = load_profile(profile_path)
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"Invalid profile: {e}")
        return

    program = ProgramAssembler(config=config).generate(profile)
    click.echo(format_program_text(program))


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def schedule(config: MesoplanConfig, snapshot_path: Path):
    """Show the calendar with completed, skipped and planned days."""
    snapshot = _load(snapshot_path)
    if snapshot is None:
        return

    program, state = _restore(snapshot, config)

    click.echo("=" * 60)
    click.echo(program.name)
    click.echo("=" * 60)
    click.echo(format_schedule_text(state.schedule, program))

    upcoming = next_scheduled_day(state.schedule, snapshot.today)
    click.echo(f"\n{'─' * 60}")
    if upcoming is None:
        click.echo("No sessions left in this program.")
    else:
        day = program.day(upcoming.week_number, upcoming.day_index)
        click.echo(f"Next: {day.label} on {upcoming.planned_date.strftime('%a %Y-%m-%d')}")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def today(config: MesoplanConfig, snapshot_path: Path):
    """Show the next session with overload, feedback and readiness applied."""
    snapshot = _load(snapshot_path)
    if snapshot is None:
        return

    program, state = _restore(snapshot, config)
    upcoming = next_scheduled_day(state.schedule, snapshot.today)
    if upcoming is None:
        click.echo("No sessions left in this program.")
        return

    history = list(snapshot.history)
    day = program.day(upcoming.week_number, upcoming.day_index)
    suggestions = OverloadAdvisor().suggest(history, day)

    # Last logged load first, suggestions win where they exist
    overrides = {}
    for pex in day.exercises:
        logged = last_logged_weight(pex.exercise_id, history)
        if logged is not None:
            overrides[pex.exercise_id] = logged
    overrides.update({ex_id: s.params['weight'] for ex_id, s in suggestions.items() if 'weight' in s.params})

    adjustments = week_feedback_adjustments(program, upcoming.week_number - 1, snapshot.feedback)
    merged = ScheduleReconciler(config=config).get_merged_exercises(program, state.schedule)
    exercises = flatten_program_day(
        day,
        weight_overrides=overrides,
        merged=merged,
        set_deltas=day_set_deltas(day, adjustments),
    )

    click.echo("=" * 60)
    click.echo(f"WEEK {upcoming.week_number} - {day.label}")
    click.echo(f"{upcoming.planned_date.strftime('%A %Y-%m-%d')}")
    click.echo("=" * 60)

    if snapshot.readiness is not None:
        score = readiness_score(snapshot.readiness)
        session_adj = session_adjustments(score)
        click.echo(f"Readiness: {score}/100 ({session_adj.level.value})")
        click.echo(render(readiness_nudge_key(session_adj.level)))
        preview = readiness_preview(session_adj)
        if preview is not None:
            click.echo(render(*preview))
        exercises = apply_readiness(exercises, session_adj, config.min_rest_seconds)
        click.echo('─' * 60)

    if merged:
        click.echo(f"Includes {len(merged)} exercise(s) carried over from a merged day")

    for i, ex in enumerate(exercises, 1):
        weight = f" @ {ex['weight']:g}kg" if ex['weight'] else ""
        click.echo(
            f"{i}. {ex['name']}: {ex['sets']} x {ex['min_reps']}-{ex['max_reps']}{weight}, "
            f"RIR {ex['target_rir']}, rest {ex['rest_time']}s"
        )
        if ex['exercise_id'] in suggestions:
            key, params = overload_message(suggestions[ex['exercise_id']])
            click.echo(f"   → {render(key, params)}")
        e1rm = last_session_e1rm(ex['exercise_id'], history)
        if e1rm:
            click.echo(f"   last e1RM ~{e1rm:.1f}kg")


def _print_resolution(resolution):
    click.echo("=" * 60)
    click.echo(f"MISSED DAYS ({resolution.severity.value.upper()})")
    click.echo("=" * 60)
    click.echo(render(resolution.nudge_key))
    click.echo(f"\nDays since last session: {resolution.days_since_last}")
    click.echo(f"Week context: {resolution.week_context.value}")
    click.echo(f"Phase: {resolution.mesocycle_phase.value}")
    for sd in resolution.missed_days:
        click.echo(f"  ✗ W{sd.week_number} D{sd.day_index + 1} ({sd.planned_date.isoformat()})")

    if resolution.muscle_recovery:
        click.echo(f"\n{'─' * 60}")
        click.echo("RECOVERY")
        click.echo('─' * 60)
        for mr in resolution.muscle_recovery:
            hours = "never" if mr.hours_since_training >= 999 else f"{mr.hours_since_training:.0f}h"
            click.echo(f"  {mr.muscle}: {mr.status.value} ({hours})")

    click.echo(f"\n{'─' * 60}")
    click.echo("OPTIONS")
    click.echo('─' * 60)
    for opt in resolution.options:
        label_key, desc_key, params = option_message(opt)
        marker = "★" if opt.recommended else " "
        click.echo(f" {marker} [{opt.action.value}] {render(label_key, params)}")
        click.echo(f"     {render(desc_key, params)}")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def reconcile(config: MesoplanConfig, snapshot_path: Path):
    """Detect missed days and list resolution options."""
    snapshot = _load(snapshot_path)
    if snapshot is None:
        return

    program, state = _restore(snapshot, config)
    state = reconcile_state(
        program, state, list(snapshot.history),
        ScheduleReconciler(config=config), snapshot.today
    )

    if state.pending_resolution is None:
        click.echo("✓ Schedule is on track, nothing missed.")
        return

    _print_resolution(state.pending_resolution)


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--action', required=True, type=click.Choice(ACTIONS), help='Resolution to apply')
@click.option('--save', is_flag=True, help='Record the resolution in the snapshot file')
@click.pass_obj
def resolve(config: MesoplanConfig, snapshot_path: Path, action: str, save: bool):
    """Apply a resolution and show the rewritten schedule."""
    snapshot = _load(snapshot_path)
    if snapshot is None:
        return

    reconciler = ScheduleReconciler(config=config)
    program, state = _restore(snapshot, config)
    state = reconcile_state(program, state, list(snapshot.history), reconciler, snapshot.today)

    if state.pending_resolution is None:
        click.echo("✓ Schedule is on track, nothing to resolve.")
        return

    chosen = ResolutionAction(action)
    offered = [o.action for o in state.pending_resolution.options]
    if chosen not in offered:
        _fail(f"'{action}' is not available here (options: {', '.join(a.value for a in offered)})")
        return

    state = apply_resolution(state, chosen, reconciler, snapshot.today)

    click.echo(f"✓ Applied {action}")
    click.echo(f"Now at week {state.current_week}, day {state.current_day_index + 1}")
    click.echo(f"\n{'─' * 60}")
    click.echo(format_schedule_text(state.schedule, program))

    if save:
        append_resolution(snapshot_path, chosen, snapshot.today)
        click.echo(f"\n✓ Saved to {snapshot_path}")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--week', 'week_number', type=int, default=None, help='Program week (default: current week)')
@click.pass_obj
def feedback(config: MesoplanConfig, snapshot_path: Path, week_number: Optional[int]):
    """Turn a week's session feedback into set changes for the next week."""
    snapshot = _load(snapshot_path)
    if snapshot is None:
        return

    program, state = _restore(snapshot, config)
    week_number = week_number or state.current_week
    week = program.week(week_number)
    if week is None:
        _fail(f"Week {week_number} is not in this {program.total_weeks}-week program")
        return

    recorded = week_feedback(program, week_number, snapshot.feedback)
    adjustments = week_feedback_adjustments(program, week_number, snapshot.feedback)
    next_week = program.week(week_number + 1)

    click.echo("=" * 60)
    click.echo(f"FEEDBACK - WEEK {week_number}")
    click.echo("=" * 60)
    click.echo(f"Feedback on {len(recorded)}/{len(week.days)} sessions")

    for day_index, fb in sorted(recorded.items()):
        if fb.joint_pain:
            click.echo(f"  ⚠ Joint pain reported on W{week_number} D{day_index + 1} ({week.days[day_index].label})")

    click.echo(f"\n{'─' * 60}")
    if len(recorded) < len(week.days) / 2:
        click.echo("Not enough feedback to adjust next week.")
        return
    if not adjustments:
        click.echo("✓ Volume is in the sweet spot, no changes.")
        return

    click.echo(render(adjustments[0].reason_key))
    for adj in adjustments:
        sign = f"{adj.delta_sets:+d}"
        if next_week is None or adj.muscle not in next_week.volume_targets:
            click.echo(f"  {adj.muscle}: {sign} sets")
            continue
        current = next_week.volume_targets[adj.muscle]
        target = max(0, current + adj.delta_sets)
        zone = ""
        if adj.muscle in VOLUME_LANDMARKS:
            zone = f" ({volume_zone(target, VOLUME_LANDMARKS[adj.muscle]).value})"
        click.echo(f"  {adj.muscle}: {sign} sets, {current} → {target} next week{zone}")


if __name__ == '__main__':
    cli()
