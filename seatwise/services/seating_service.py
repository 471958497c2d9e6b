# /seatwise/services/seating_service.py

"""
This module is the single entry point for seat assignment. It owns the
failover protocol between the two strategies and the final invariant checks.

One run moves through START -> PRIMARY_ATTEMPTED -> (PRIMARY_ACCEPTED |
FALLBACK_INVOKED) -> VALIDATED -> DONE. An empty roster skips the primary
strategy altogether and goes START -> FALLBACK_INVOKED -> VALIDATED -> DONE,
so PRIMARY_ATTEMPTED is never reported for it. Nothing is kept between runs; every
run works on its own request-scoped data, so concurrent requests need no
locking.
"""

import os
import asyncio
import inspect
from dotenv import load_dotenv
from typing import Awaitable, Callable, List, Optional, Union

from ..models.seating_model import (
    StudentProfile, ClassroomLayout, SeatingPlan, SeatingRun, SeatingChartResult,
    SavedChartRecord, PlanSource, RunStage
)
from .seating_helpers import grid, reconciliation, chart_assembly
from .seating_helpers.strategy import AssignmentStrategy, StrategyOutcome, StrategyResult
from .seating_helpers.optimizer_adapter import ExternalOptimizerStrategy
from .seating_helpers.deterministic_packer import DeterministicPackerStrategy, pack_seats

# --- CONFIGURATION ---
load_dotenv()
SEATING_OPTIMIZATION_TIMEOUT_SECONDS = float(os.getenv("SEATING_OPTIMIZATION_TIMEOUT_SECONDS", "45"))
# Largest accepted row or column count; the seat grid is built in full for every chart.
MAX_LAYOUT_DIMENSION = int(os.getenv("MAX_LAYOUT_DIMENSION", "50"))

ProgressCallback = Callable[[RunStage], Union[None, Awaitable[None]]]


# --- Internal Helpers ---

async def _report(on_progress: Optional[ProgressCallback], stage: RunStage) -> None:
    print(f"[SEATING] {stage.value}")
    if on_progress is None:
        return
    outcome = on_progress(stage)
    if inspect.isawaitable(outcome):
        await outcome

def _validate_request(profiles: List[StudentProfile], layout: ClassroomLayout) -> None:
    if layout.rows <= 0 or layout.cols <= 0:
        raise ValueError(
            f"Classroom layout must have a positive number of rows and columns (got {layout.rows}x{layout.cols})."
        )
    if layout.rows > MAX_LAYOUT_DIMENSION or layout.cols > MAX_LAYOUT_DIMENSION:
        raise ValueError(
            f"Classroom layout may have at most {MAX_LAYOUT_DIMENSION} rows and {MAX_LAYOUT_DIMENSION} columns "
            f"(got {layout.rows}x{layout.cols})."
        )
    seen = set()
    duplicates = []
    for p in profiles:
        if p.studentId in seen:
            duplicates.append(p.studentId)
        seen.add(p.studentId)
    if duplicates:
        raise ValueError(f"Each student may appear only once. Duplicate IDs: {', '.join(sorted(set(duplicates)))}")

async def _attempt_primary(
    strategy: AssignmentStrategy,
    profiles: List[StudentProfile],
    layout: ClassroomLayout,
    timeout_seconds: float
) -> StrategyResult:
    """Runs the primary strategy under a hard deadline. Never raises."""
    try:
        return await asyncio.wait_for(strategy.attempt(profiles, layout), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        print(f"ERROR in {strategy.name}: no answer within {timeout_seconds}s.")
        return StrategyResult.failed(StrategyOutcome.TIMEOUT, f"Timed out after {timeout_seconds} seconds.")
    except Exception as e:
        print(f"ERROR in {strategy.name}: {e}")
        return StrategyResult.failed(StrategyOutcome.TRANSPORT_ERROR, str(e))


# --- Core Public Functions ---

async def assign_seats(
    profiles: List[StudentProfile],
    layout: ClassroomLayout,
    *,
    primary: Optional[AssignmentStrategy] = None,
    fallback: Optional[AssignmentStrategy] = None,
    timeout_seconds: Optional[float] = None,
    on_progress: Optional[ProgressCallback] = None
) -> SeatingRun:
    """
    Produces a validated seating plan for `profiles` in `layout`.

    The primary strategy gets one attempt under `timeout_seconds`. Any failure
    (timeout, transport, schema) hands the run to the fallback strategy. The
    candidate plan is then sanitized against the grid, so the returned plan
    never contains an out-of-bounds seat, a shared seat or a repeated student.
    An empty `profiles` list never reaches the primary strategy: the run
    reports FALLBACK_INVOKED straight after START and returns an empty plan.

    Raises:
        ValueError: layout dimensions that are non-positive or above
            MAX_LAYOUT_DIMENSION, or repeated student IDs.
    """
    _validate_request(profiles, layout)
    primary = primary or ExternalOptimizerStrategy()
    fallback = fallback or DeterministicPackerStrategy()
    timeout = SEATING_OPTIMIZATION_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds

    await _report(on_progress, RunStage.START)

    if not profiles:
        # Nothing to optimize; the packer yields the empty plan directly.
        await _report(on_progress, RunStage.FALLBACK_INVOKED)
        candidate, source = pack_seats(profiles, layout), PlanSource.FALLBACK
    else:
        result = await _attempt_primary(primary, profiles, layout, timeout)
        await _report(on_progress, RunStage.PRIMARY_ATTEMPTED)
        if result.succeeded:
            await _report(on_progress, RunStage.PRIMARY_ACCEPTED)
            candidate, source = result.plan, PlanSource.PRIMARY
        else:
            print(f"[SEATING] Primary strategy failed ({result.outcome.value}): {result.error}. Falling back.")
            await _report(on_progress, RunStage.FALLBACK_INVOKED)
            fallback_result = await fallback.attempt(profiles, layout)
            candidate = fallback_result.plan if fallback_result.succeeded else pack_seats(profiles, layout)
            source = PlanSource.FALLBACK

    plan = reconciliation.sanitize_plan(candidate, profiles, layout)
    plan = reconciliation.backfill_unplaced(plan, profiles, layout)

    problems = reconciliation.violations(plan, layout)
    if problems:
        # Unreachable after sanitizing; refuse to hand out a corrupt plan regardless.
        raise RuntimeError(f"Seating plan failed validation: {'; '.join(problems)}")
    await _report(on_progress, RunStage.VALIDATED)

    run = SeatingRun(
        plan=plan,
        source=source,
        unseatedStudentIds=reconciliation.unseated_student_ids(plan, profiles)
    )
    await _report(on_progress, RunStage.DONE)
    return run

def build_chart_result(
    run: SeatingRun,
    profiles: List[StudentProfile],
    layout: ClassroomLayout,
    name_resolver: Optional[chart_assembly.NameResolver] = None
) -> SeatingChartResult:
    """Merges a run with display names and the full seat grid for presentation."""
    lookup = chart_assembly.build_name_lookup(profiles, name_resolver)
    return SeatingChartResult(
        plan=run.plan,
        source=run.source,
        seats=grid.build_seat_grid(layout, run.plan.assignments, lookup),
        unseatedStudentIds=run.unseatedStudentIds,
        rationaleText=chart_assembly.format_rationale(run.plan, profiles, name_resolver)
    )

def build_saved_chart(
    plan: SeatingPlan,
    profiles: List[StudentProfile],
    layout: ClassroomLayout
) -> SavedChartRecord:
    """
    Builds the record a persistence layer stores for a chart the teacher wants
    to keep. The plan may have been edited by hand, so it is checked again and
    rejected, not repaired, when it breaks the grid invariants.
    """
    _validate_request(profiles, layout)
    problems = reconciliation.violations(plan, layout)
    known_ids = {p.studentId for p in profiles}
    unknown = [a.studentId for a in plan.assignments if a.studentId not in known_ids]
    if unknown:
        problems.append(f"unknown student IDs: {', '.join(unknown)}")
    if problems:
        raise ValueError(f"The seating plan cannot be saved: {'; '.join(problems)}")
    return chart_assembly.build_chart_record(plan, profiles, layout)

async def generate_seating_chart(
    profiles: List[StudentProfile],
    layout: ClassroomLayout,
    on_progress: Optional[ProgressCallback] = None
) -> SeatingChartResult:
    run = await assign_seats(profiles, layout, on_progress=on_progress)
    return build_chart_result(run, profiles, layout)
