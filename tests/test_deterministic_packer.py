# /tests/test_deterministic_packer.py

import pytest

from seatwise.models.seating_model import StudentProfile, ClassroomLayout
from seatwise.services.seating_helpers import grid, deterministic_packer
from seatwise.services.seating_helpers.profile_summarizer import focus_rank
from seatwise.services.seating_helpers.strategy import StrategyOutcome

# --- Test Data Fixtures ---

@pytest.fixture
def six_sorted_students():
    """Six students whose input order is already focus-sorted."""
    levels = ["High", "High", "Medium", "Medium", "Low", "Low"]
    return [
        StudentProfile(studentId=f"student{i}", focusLevel=level, personalityType="analytical")
        for i, level in enumerate(levels, start=1)
    ]

@pytest.fixture
def mixed_students():
    levels = ["low", None, "high", "medium", "high", "unexpected", "low", "medium", "high", "medium"]
    return [StudentProfile(studentId=f"stu_{i}", focusLevel=level) for i, level in enumerate(levels)]

# --- Unit Tests ---

def test_six_students_fill_two_by_three_row_major(six_sorted_students):
    plan = deterministic_packer.pack_seats(six_sorted_students, ClassroomLayout(rows=2, cols=3))

    seats = {a.studentId: (a.row, a.col) for a in plan.assignments}
    assert seats == {
        "student1": (0, 0), "student2": (0, 1), "student3": (0, 2),
        "student4": (1, 0), "student5": (1, 1), "student6": (1, 2),
    }
    print("\n✅ SUCCESS: test_six_students_fill_two_by_three_row_major passed.")

def test_more_students_than_seats_leaves_the_rest_unseated(mixed_students):
    plan = deterministic_packer.pack_seats(mixed_students, ClassroomLayout(rows=2, cols=3))

    assert len(plan.assignments) == 6
    seated = {a.studentId for a in plan.assignments}
    assert len(seated) == 6
    # The three high-focus students take the front row.
    assert [a.studentId for a in plan.assignments[:3]] == ["stu_2", "stu_4", "stu_8"]

def test_empty_roster_gives_empty_plan():
    plan = deterministic_packer.pack_seats([], ClassroomLayout(rows=3, cols=3))
    assert plan.assignments == []
    assert plan.overallStrategy == deterministic_packer.FALLBACK_OVERALL_STRATEGY

def test_ties_keep_input_order():
    students = [StudentProfile(studentId=sid, focusLevel="medium") for sid in ["c", "a", "b"]]
    plan = deterministic_packer.pack_seats(students, ClassroomLayout(rows=1, cols=3))
    assert [a.studentId for a in plan.assignments] == ["c", "a", "b"]

def test_higher_focus_never_sits_behind_lower_focus(mixed_students):
    layout = ClassroomLayout(rows=4, cols=3)
    plan = deterministic_packer.pack_seats(mixed_students, layout)
    ranks = {p.studentId: focus_rank(p.focusLevel) for p in mixed_students}

    for a in plan.assignments:
        for b in plan.assignments:
            if ranks[a.studentId] > ranks[b.studentId]:
                assert grid.seat_index(layout, a.row, a.col) <= grid.seat_index(layout, b.row, b.col)

def test_packing_is_deterministic(mixed_students):
    layout = ClassroomLayout(rows=3, cols=3)
    first = deterministic_packer.pack_seats(mixed_students, layout)
    second = deterministic_packer.pack_seats(list(mixed_students), layout)
    assert first.model_dump_json() == second.model_dump_json()

def test_reasoning_names_focus_and_personality():
    students = [
        StudentProfile(studentId="a", focusLevel="High", personalityType="creative"),
        StudentProfile(studentId="b"),
    ]
    plan = deterministic_packer.pack_seats(students, ClassroomLayout(rows=1, cols=2))
    assert plan.assignments[0].reasoning == "Placed based on High focus level and creative personality"
    assert plan.assignments[1].reasoning == "Placed based on unknown focus level and unknown personality"

def test_fixed_summary_fields_do_not_depend_on_data(six_sorted_students):
    small = deterministic_packer.pack_seats(six_sorted_students[:1], ClassroomLayout(rows=1, cols=1))
    large = deterministic_packer.pack_seats(six_sorted_students, ClassroomLayout(rows=4, cols=4))
    for field in ("overallStrategy", "considerations", "potentialIssues", "recommendations"):
        assert getattr(small, field) == getattr(large, field)

@pytest.mark.asyncio
async def test_packer_strategy_always_succeeds(six_sorted_students):
    result = await deterministic_packer.DeterministicPackerStrategy().attempt(
        six_sorted_students, ClassroomLayout(rows=1, cols=2)
    )
    assert result.outcome == StrategyOutcome.OK
    assert result.succeeded
    assert len(result.plan.assignments) == 2
