# /seatwise/services/seating_helpers/reconciliation.py

"""
Specialist helpers that turn a candidate plan from either strategy into one
that respects the grid invariants:

- every seat lies inside the layout,
- no seat is used twice,
- no student is seated twice,
- every seated student is one of the requested students.

Offending entries are dropped, never repaired, and each drop is reported in
the plan's `potentialIssues`.
"""

from typing import List, Set, Tuple

from ...models.seating_model import StudentProfile, ClassroomLayout, SeatAssignment, SeatingPlan
from . import grid
from .deterministic_packer import order_by_focus, placement_reasoning


def sanitize_plan(plan: SeatingPlan, profiles: List[StudentProfile], layout: ClassroomLayout) -> SeatingPlan:
    known_ids = {p.studentId for p in profiles}
    seen_students: Set[str] = set()
    seen_seats: Set[Tuple[int, int]] = set()
    kept: List[SeatAssignment] = []
    anomalies: List[str] = []

    for assignment in plan.assignments:
        seat = (assignment.row, assignment.col)
        if assignment.studentId not in known_ids:
            anomalies.append(f"Dropped a placement for unknown student ID '{assignment.studentId}'.")
            continue
        if not grid.is_in_bounds(layout, assignment.row, assignment.col):
            anomalies.append(
                f"Dropped an out-of-bounds placement for student '{assignment.studentId}' "
                f"at row {assignment.row}, col {assignment.col}."
            )
            continue
        if assignment.studentId in seen_students:
            anomalies.append(f"Dropped a duplicate placement for student '{assignment.studentId}'.")
            continue
        if seat in seen_seats:
            anomalies.append(
                f"Dropped a placement for student '{assignment.studentId}': "
                f"seat at row {assignment.row}, col {assignment.col} was already taken."
            )
            continue
        seen_students.add(assignment.studentId)
        seen_seats.add(seat)
        kept.append(assignment)

    if not anomalies:
        return plan

    for anomaly in anomalies:
        print(f"WARNING: {anomaly}")
    return plan.model_copy(update={
        "assignments": kept,
        "potentialIssues": [*plan.potentialIssues, *anomalies]
    })

def backfill_unplaced(plan: SeatingPlan, profiles: List[StudentProfile], layout: ClassroomLayout) -> SeatingPlan:
    """
    Seats students a (sanitized) plan left out into the free seats, front to
    back, highest focus first. Expects a plan that already passed
    `sanitize_plan`.
    """
    placed_ids = {a.studentId for a in plan.assignments}
    waiting = [p for p in order_by_focus(profiles) if p.studentId not in placed_ids]
    if not waiting:
        return plan

    taken = {(a.row, a.col) for a in plan.assignments}
    # Lazy: only as many seats are scanned as there are students waiting.
    free_seats = (seat for seat in grid.iter_seats(layout) if seat not in taken)
    additions = [
        SeatAssignment(studentId=p.studentId, row=row, col=col, reasoning=placement_reasoning(p))
        for p, (row, col) in zip(waiting, free_seats)
    ]
    if not additions:
        return plan

    note = (
        f"{len(additions)} student(s) were missing from the optimized plan and were placed "
        f"in the remaining seats by focus level."
    )
    print(f"WARNING: {note}")
    return plan.model_copy(update={
        "assignments": [*plan.assignments, *additions],
        "potentialIssues": [*plan.potentialIssues, note]
    })

def unseated_student_ids(plan: SeatingPlan, profiles: List[StudentProfile]) -> List[str]:
    seated = {a.studentId for a in plan.assignments}
    return [p.studentId for p in profiles if p.studentId not in seated]

def violations(plan: SeatingPlan, layout: ClassroomLayout) -> List[str]:
    """Lists every grid invariant the plan breaks. Empty means valid."""
    problems = []
    seats = [(a.row, a.col) for a in plan.assignments]
    students = [a.studentId for a in plan.assignments]
    for a in plan.assignments:
        if not grid.is_in_bounds(layout, a.row, a.col):
            problems.append(f"out of bounds: {a.studentId} at ({a.row}, {a.col})")
    if len(set(seats)) != len(seats):
        problems.append("duplicate seat coordinates")
    if len(set(students)) != len(students):
        problems.append("duplicate student IDs")
    return problems
