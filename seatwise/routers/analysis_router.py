# /seatwise/routers/analysis_router.py

from fastapi import APIRouter

from ..models import seating_model
from ..services import analysis_service

router = APIRouter()


@router.post(
    "/student",
    response_model=seating_model.StudentAnalysisResponse,
    summary="Generate a Teaching Analysis for One Student",
    description="Advisory text only. A failed or slow generation returns a fixed message, never an error."
)
async def generate_student_analysis(request: seating_model.StudentAnalysisRequest):
    return await analysis_service.generate_student_analysis(request.studentData)
