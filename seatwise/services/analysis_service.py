# /seatwise/services/analysis_service.py

"""
Per-student narrative analysis. Unlike seat assignment this is advisory text
with no structural contract, so there is no deterministic fallback: any
failure yields a fixed message instead of an error.
"""

import os
import asyncio
from dotenv import load_dotenv
from typing import Optional

from ..models.seating_model import StudentProfile, StudentAnalysisResponse
from . import gemini_service, prompt_library

load_dotenv()
STUDENT_ANALYSIS_TIMEOUT_SECONDS = float(os.getenv("STUDENT_ANALYSIS_TIMEOUT_SECONDS", "30"))

ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_OUTPUT_TOKENS = 800

ANALYSIS_TIMEOUT_MESSAGE = "Request timed out. The AI analysis is taking longer than expected. Please try again."
ANALYSIS_FAILED_MESSAGE = "Sorry, there was an error generating the analysis. Please try again."


def build_analysis_prompt(profile: StudentProfile) -> str:
    special_needs_line = f"Special Needs: {profile.specialNeeds}" if profile.specialNeeds else ""
    return prompt_library.STUDENT_ANALYSIS_PROMPT.format(
        personality_type=profile.personalityType or "Unknown",
        learning_style=profile.learningStyle or "Unknown",
        social_preference=profile.socialPreference or "Unknown",
        focus_level=profile.focusLevel or "Unknown",
        noise_tolerance=profile.noiseTolerance or "Unknown",
        movement_needs=profile.movementNeeds or "Unknown",
        special_needs_line=special_needs_line
    )

async def generate_student_analysis(profile: StudentProfile, timeout_seconds: Optional[float] = None) -> StudentAnalysisResponse:
    timeout = STUDENT_ANALYSIS_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
    prompt = build_analysis_prompt(profile)
    try:
        text = await asyncio.wait_for(
            gemini_service.generate_text(
                prompt,
                temperature=ANALYSIS_TEMPERATURE,
                max_output_tokens=ANALYSIS_MAX_OUTPUT_TOKENS,
                log_context="STUDENT-ANALYSIS"
            ),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        print(f"ERROR: Student analysis for {profile.studentId} timed out after {timeout}s.")
        return StudentAnalysisResponse(analysis=ANALYSIS_TIMEOUT_MESSAGE, succeeded=False)
    except Exception as e:
        print(f"ERROR generating analysis for {profile.studentId}: {e}")
        return StudentAnalysisResponse(analysis=ANALYSIS_FAILED_MESSAGE, succeeded=False)

    return StudentAnalysisResponse(analysis=text, succeeded=True)
