# /seatwise/services/seating_helpers/chart_assembly.py

"""
Turns a finished SeatingPlan into the shapes the rest of the application
consumes: a teacher-facing rationale text and the saved-chart record handed to
the persistence layer. Nothing here is persisted.
"""

from typing import Callable, Dict, List, Optional

from ...models.seating_model import (
    StudentProfile, ClassroomLayout, SeatingPlan, SavedChartRecord, ChartSeat
)
from .profile_summarizer import resolve_display_name

NameResolver = Callable[[StudentProfile], str]


def build_name_lookup(
    profiles: List[StudentProfile],
    name_resolver: Optional[NameResolver] = None
) -> Callable[[str], Optional[str]]:
    """
    Maps student IDs to display names. `name_resolver` lets an anonymizing
    resolver stand in for `resolve_display_name`.
    """
    resolver = name_resolver or resolve_display_name
    names: Dict[str, str] = {p.studentId: resolver(p) for p in profiles}
    return names.get

def _numbered(items: List[str]) -> List[str]:
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)]

def format_rationale(
    plan: SeatingPlan,
    profiles: List[StudentProfile],
    name_resolver: Optional[NameResolver] = None
) -> str:
    """Renders the plan as the rationale text stored alongside a saved chart."""
    lookup = build_name_lookup(profiles, name_resolver)

    lines = ["Seating Optimization Results", "", f"Strategy: {plan.overallStrategy}", "", "Key Points:"]
    lines.extend(_numbered(plan.considerations))

    lines.extend(["", "Student Placements:"])
    for a in plan.assignments:
        name = lookup(a.studentId) or "Unknown"
        # Rows and columns are shown 1-based to teachers.
        lines.append(f"- {name} (Row {a.row + 1}, Col {a.col + 1}): {a.reasoning}")

    if plan.potentialIssues:
        lines.extend(["", "Watch For:"])
        lines.extend(_numbered(plan.potentialIssues))

    lines.extend(["", "Teaching Tips:"])
    lines.extend(_numbered(plan.recommendations))

    lines.extend(["", f"Placed {len(plan.assignments)}/{len(profiles)} students"])
    return "\n".join(lines)

def build_chart_record(
    plan: SeatingPlan,
    profiles: List[StudentProfile],
    layout: ClassroomLayout,
    name_resolver: Optional[NameResolver] = None
) -> SavedChartRecord:
    lookup = build_name_lookup(profiles, name_resolver)
    student_assignments = {
        a.studentId: ChartSeat(row=a.row, col=a.col, displayName=lookup(a.studentId) or "Unknown")
        for a in plan.assignments
    }
    return SavedChartRecord(
        classroomLayout=layout,
        studentAssignments=student_assignments,
        rationaleText=format_rationale(plan, profiles, name_resolver)
    )
