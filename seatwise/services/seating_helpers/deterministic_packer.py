# /seatwise/services/seating_helpers/deterministic_packer.py

"""
The fallback seating strategy. Local, total and deterministic: students are
ordered by focus level (high first, ties keep their input order) and poured
into the grid row by row from the front-left seat until either students or
seats run out.
"""

from typing import List

from ...models.seating_model import StudentProfile, ClassroomLayout, SeatAssignment, SeatingPlan
from . import grid
from .profile_summarizer import focus_rank
from .strategy import AssignmentStrategy, StrategyResult

FALLBACK_OVERALL_STRATEGY = "Focus-based seating with systematic placement"
FALLBACK_CONSIDERATIONS = ["Student focus levels", "Personality types", "Classroom layout"]
FALLBACK_POTENTIAL_ISSUES = ["May need adjustment based on student interactions"]
FALLBACK_RECOMMENDATIONS = ["Monitor student engagement", "Adjust as needed after observation"]


def order_by_focus(profiles: List[StudentProfile]) -> List[StudentProfile]:
    # sorted() is stable, so equal ranks keep the caller's order.
    return sorted(profiles, key=lambda p: focus_rank(p.focusLevel), reverse=True)

def placement_reasoning(profile: StudentProfile) -> str:
    focus = profile.focusLevel or "unknown"
    personality = profile.personalityType or "unknown"
    return f"Placed based on {focus} focus level and {personality} personality"

def pack_seats(profiles: List[StudentProfile], layout: ClassroomLayout) -> SeatingPlan:
    seats = grid.iter_seats(layout)
    assignments = []
    for profile, (row, col) in zip(order_by_focus(profiles), seats):
        assignments.append(SeatAssignment(
            studentId=profile.studentId,
            row=row,
            col=col,
            reasoning=placement_reasoning(profile)
        ))

    return SeatingPlan(
        assignments=assignments,
        overallStrategy=FALLBACK_OVERALL_STRATEGY,
        considerations=list(FALLBACK_CONSIDERATIONS),
        potentialIssues=list(FALLBACK_POTENTIAL_ISSUES),
        recommendations=list(FALLBACK_RECOMMENDATIONS)
    )


class DeterministicPackerStrategy(AssignmentStrategy):
    name = "deterministic-packer"

    async def attempt(self, profiles: List[StudentProfile], layout: ClassroomLayout) -> StrategyResult:
        return StrategyResult.ok(pack_seats(profiles, layout))
