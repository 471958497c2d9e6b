# /tests/test_optimizer_adapter.py

import json
import pytest
from unittest.mock import AsyncMock

from seatwise.models.seating_model import StudentProfile, ClassroomLayout
from seatwise.services.seating_helpers import optimizer_adapter
from seatwise.services.seating_helpers.strategy import StrategyOutcome

# --- Test Data Fixtures ---

@pytest.fixture
def students():
    return [
        StudentProfile(studentId="stu_1", firstName="Ada", lastName="Lovelace", focusLevel="high",
                       personalityType="analytical", specialNeeds="Needs to sit near the board"),
        StudentProfile(studentId="stu_2", email="grace.hopper@school.edu", focusLevel="low",
                       personalityType="social"),
    ]

@pytest.fixture
def layout():
    return ClassroomLayout(rows=2, cols=3)

@pytest.fixture
def valid_payload():
    return {
        "assignments": [
            {"studentId": "stu_1", "row": 0, "col": 1, "reasoning": "High focus, front row."},
            {"studentId": "stu_2", "row": 1, "col": 0, "reasoning": "Social, near peers."},
        ],
        "overallStrategy": "Front-load focus, spread social students.",
        "considerations": ["Focus levels"],
        "potentialIssues": ["Back row chatter"],
        "recommendations": ["Check in after a week"],
    }

# --- Prompt Construction ---

def test_prompt_carries_bounds_and_full_profiles(students, layout):
    prompt = optimizer_adapter.build_optimization_prompt(students, layout)

    assert "Rows are numbered 0 to 1" in prompt
    assert "Columns are numbered 0 to 2" in prompt
    assert "There are 6 seats" in prompt
    assert "Student ID: stu_1" in prompt
    assert "Name: Grace Hopper" in prompt
    assert "Special Needs: Needs to sit near the board" in prompt
    assert "Special Needs: None" in prompt

# --- Response Contract ---

def test_valid_payload_is_accepted(valid_payload):
    result = optimizer_adapter.parse_optimizer_payload(valid_payload)
    assert result.outcome == StrategyOutcome.OK
    assert [(a.studentId, a.row, a.col) for a in result.plan.assignments] == [("stu_1", 0, 1), ("stu_2", 1, 0)]
    assert result.plan.potentialIssues == ["Back row chatter"]

def test_snake_case_payload_is_accepted():
    payload = {
        "assignments": [{"student_id": "stu_1", "row": 0, "col": 0, "reasoning": ""}],
        "overall_strategy": "x",
        "considerations": [],
        "potential_issues": [],
        "recommendations": [],
    }
    assert optimizer_adapter.parse_optimizer_payload(payload).succeeded

@pytest.mark.parametrize("mutate", [
    lambda p: p.pop("overallStrategy"),
    lambda p: p.pop("assignments"),
    lambda p: p["assignments"][0].update(row="0"),
    lambda p: p["assignments"][0].pop("reasoning"),
    lambda p: p.update(considerations="Focus levels"),
    lambda p: p["assignments"][1].update(studentId=2),
])
def test_schema_violations_are_rejected_not_coerced(valid_payload, mutate):
    mutate(valid_payload)
    result = optimizer_adapter.parse_optimizer_payload(valid_payload)
    assert result.outcome == StrategyOutcome.SCHEMA_ERROR
    assert result.plan is None

def test_whole_number_float_coordinates_are_read_as_integers(valid_payload):
    """
    GIVEN: An optimizer reply that writes a seat as {"row": 1.0, "col": 0.0}.
    WHEN:  The payload is validated.
    THEN:  The attempt succeeds and the seat is stored as the integers (1, 0).
    """
    valid_payload["assignments"][1].update(row=1.0, col=0.0)

    result = optimizer_adapter.parse_optimizer_payload(valid_payload)

    assert result.outcome == StrategyOutcome.OK
    seat = result.plan.assignments[1]
    assert (seat.row, seat.col) == (1, 0)
    assert type(seat.row) is int and type(seat.col) is int

@pytest.mark.parametrize("row", [1.5, True])
def test_fractional_or_boolean_coordinates_are_rejected(valid_payload, row):
    valid_payload["assignments"][0].update(row=row)
    result = optimizer_adapter.parse_optimizer_payload(valid_payload)
    assert result.outcome == StrategyOutcome.SCHEMA_ERROR

def test_non_object_payload_is_a_schema_error():
    assert optimizer_adapter.parse_optimizer_payload(["not", "an", "object"]).outcome == StrategyOutcome.SCHEMA_ERROR

# --- Strategy Attempts (Gemini mocked) ---

@pytest.mark.asyncio
async def test_attempt_returns_validated_plan(mocker, students, layout, valid_payload):
    mock_generate = mocker.patch(
        "seatwise.services.gemini_service.generate_json", new=AsyncMock(return_value=valid_payload)
    )

    result = await optimizer_adapter.ExternalOptimizerStrategy().attempt(students, layout)

    assert result.succeeded
    mock_generate.assert_awaited_once()
    assert "stu_2" in mock_generate.await_args.args[0]

@pytest.mark.asyncio
async def test_attempt_maps_call_failures_to_transport_error(mocker, students, layout):
    mocker.patch(
        "seatwise.services.gemini_service.generate_json",
        new=AsyncMock(side_effect=ValueError("Failed to get a valid JSON response from the AI."))
    )
    result = await optimizer_adapter.ExternalOptimizerStrategy().attempt(students, layout)
    assert result.outcome == StrategyOutcome.TRANSPORT_ERROR
    assert "valid JSON response" in result.error

@pytest.mark.asyncio
async def test_attempt_maps_malformed_json_to_schema_error(mocker, students, layout):
    mocker.patch(
        "seatwise.services.gemini_service.generate_json",
        new=AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "{oops", 1))
    )
    result = await optimizer_adapter.ExternalOptimizerStrategy().attempt(students, layout)
    assert result.outcome == StrategyOutcome.SCHEMA_ERROR

@pytest.mark.asyncio
async def test_attempt_makes_exactly_one_call(mocker, students, layout):
    mock_generate = mocker.patch(
        "seatwise.services.gemini_service.generate_json", new=AsyncMock(side_effect=ConnectionError("down"))
    )
    await optimizer_adapter.ExternalOptimizerStrategy().attempt(students, layout)
    assert mock_generate.await_count == 1
