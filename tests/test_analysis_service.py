# /tests/test_analysis_service.py

import asyncio
import pytest
from unittest.mock import AsyncMock

from seatwise.models.seating_model import StudentProfile
from seatwise.services import analysis_service

@pytest.fixture
def profile():
    return StudentProfile(
        studentId="stu_1", personalityType="creative", learningStyle="visual",
        focusLevel="medium", specialNeeds="ADHD accommodations"
    )

def test_prompt_includes_special_needs_only_when_present(profile):
    prompt = analysis_service.build_analysis_prompt(profile)
    assert "Personality: creative" in prompt
    assert "Special Needs: ADHD accommodations" in prompt

    bare = analysis_service.build_analysis_prompt(StudentProfile(studentId="stu_2"))
    assert "Special Needs" not in bare
    assert "Personality: Unknown" in bare

@pytest.mark.asyncio
async def test_successful_analysis(mocker, profile):
    mock_generate = mocker.patch(
        "seatwise.services.gemini_service.generate_text", new=AsyncMock(return_value="1. Teaching Strategies: ...")
    )
    result = await analysis_service.generate_student_analysis(profile)

    assert result.succeeded is True
    assert result.analysis.startswith("1. Teaching Strategies")
    assert mock_generate.await_args.kwargs["max_output_tokens"] == analysis_service.ANALYSIS_MAX_OUTPUT_TOKENS

@pytest.mark.asyncio
async def test_slow_analysis_times_out_with_fixed_message(mocker, profile):
    async def hang(*args, **kwargs):
        await asyncio.sleep(5)
        return "late"

    mocker.patch("seatwise.services.gemini_service.generate_text", new=hang)
    result = await analysis_service.generate_student_analysis(profile, timeout_seconds=0.05)

    assert result.succeeded is False
    assert result.analysis == analysis_service.ANALYSIS_TIMEOUT_MESSAGE

@pytest.mark.asyncio
async def test_failed_analysis_returns_fixed_message(mocker, profile):
    mocker.patch("seatwise.services.gemini_service.generate_text", new=AsyncMock(side_effect=RuntimeError("500")))
    result = await analysis_service.generate_student_analysis(profile)
    assert result == analysis_service.StudentAnalysisResponse(
        analysis=analysis_service.ANALYSIS_FAILED_MESSAGE, succeeded=False
    )
