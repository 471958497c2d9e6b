# /seatwise/services/seating_helpers/optimizer_adapter.py

"""
The primary seating strategy: asks Gemini for an optimized arrangement and
accepts the answer only if it matches the OptimizerResponse contract.

Every failure (missing key, network, empty reply, malformed JSON, contract
violation) comes back as a tagged StrategyResult. The adapter makes exactly
one attempt; timeouts are enforced by the caller.
"""

import json
from typing import Any, List
from pydantic import ValidationError

from ...models.seating_model import StudentProfile, ClassroomLayout, OptimizerResponse
from .. import gemini_service, prompt_library
from . import grid
from .profile_summarizer import resolve_display_name
from .strategy import AssignmentStrategy, StrategyOutcome, StrategyResult

SEATING_TEMPERATURE = 0.3
SEATING_MAX_OUTPUT_TOKENS = 8192


def _format_student_block(profile: StudentProfile) -> str:
    return prompt_library.STUDENT_PROFILE_BLOCK.format(
        student_id=profile.studentId,
        name=resolve_display_name(profile),
        personality_type=profile.personalityType or "Unknown",
        learning_style=profile.learningStyle or "Unknown",
        social_preference=profile.socialPreference or "Unknown",
        focus_level=profile.focusLevel or "Unknown",
        noise_tolerance=profile.noiseTolerance or "Unknown",
        movement_needs=profile.movementNeeds or "Unknown",
        peer_interaction=profile.peerInteraction or "Unknown",
        special_needs=profile.specialNeeds or "None"
    )

def build_optimization_prompt(profiles: List[StudentProfile], layout: ClassroomLayout) -> str:
    return prompt_library.SEATING_OPTIMIZATION_PROMPT.format(
        student_count=len(profiles),
        rows=layout.rows,
        cols=layout.cols,
        max_row=layout.rows - 1,
        max_col=layout.cols - 1,
        total_seats=grid.capacity(layout),
        student_blocks="\n".join(_format_student_block(p) for p in profiles)
    )

def parse_optimizer_payload(payload: Any) -> StrategyResult:
    """Validates a raw decoded payload against the response contract."""
    try:
        validated = OptimizerResponse.model_validate(payload)
    except ValidationError as e:
        print(f"ERROR in optimizer adapter: response violates the seating schema ({e.error_count()} errors).")
        return StrategyResult.failed(StrategyOutcome.SCHEMA_ERROR, str(e))
    return StrategyResult.ok(validated.to_plan())


class ExternalOptimizerStrategy(AssignmentStrategy):
    name = "external-optimizer"

    async def attempt(self, profiles: List[StudentProfile], layout: ClassroomLayout) -> StrategyResult:
        prompt = build_optimization_prompt(profiles, layout)
        try:
            payload = await gemini_service.generate_json(
                prompt,
                temperature=SEATING_TEMPERATURE,
                max_output_tokens=SEATING_MAX_OUTPUT_TOKENS,
                log_context="SEATING-OPTIMIZATION"
            )
        except json.JSONDecodeError as e:
            return StrategyResult.failed(StrategyOutcome.SCHEMA_ERROR, f"Response is not valid JSON: {e}")
        except Exception as e:
            return StrategyResult.failed(StrategyOutcome.TRANSPORT_ERROR, str(e))

        return parse_optimizer_payload(payload)
