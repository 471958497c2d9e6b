# /seatwise/routers/seating_router.py

from fastapi import APIRouter, HTTPException, status, WebSocket, WebSocketDisconnect
import json

from ..models import seating_model
from ..services import seating_service

router = APIRouter()

NO_STUDENTS_MESSAGE = "No student assessments available to generate a seating chart."


@router.post(
    "/optimize",
    response_model=seating_model.SeatingChartResult,
    summary="Generate an Optimized Seating Chart",
    description="Assigns every student to a seat. Falls back to focus-ordered placement when the AI optimizer is unavailable."
)
async def optimize_seating_chart(request: seating_model.SeatingChartRequest):
    # The engine accepts an empty roster, but a chart request without students is a client error.
    if not request.students:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NO_STUDENTS_MESSAGE)
    try:
        return await seating_service.generate_seating_chart(request.students, request.classroomLayout)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except Exception as e:
        print(f"ERROR during seating optimization: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred.")


@router.post(
    "/chart-record",
    response_model=seating_model.SavedChartRecord,
    summary="Build a Saved-Chart Record",
    description="Validates a (possibly hand-edited) plan and returns the record shape used to persist a chart."
)
def build_chart_record(request: seating_model.ChartRecordRequest):
    try:
        return seating_service.build_saved_chart(request.plan, request.students, request.classroomLayout)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


# --- REAL-TIME PROGRESS ENDPOINT ---

@router.websocket("/ws")
async def seating_progress_websocket(websocket: WebSocket):
    """
    Runs one optimization per connection and streams the run's stages as they
    happen, finishing with the full result.
    """
    await websocket.accept()

    async def send_progress(stage: seating_model.RunStage):
        await websocket.send_json({"type": "progress", "payload": {"stage": stage.value}})

    try:
        message_data = json.loads(await websocket.receive_text())
        if not isinstance(message_data, dict):
            raise ValueError("Expected a JSON object message.")
        if message_data.get("type") != "optimize":
            raise ValueError("Expected a message of type 'optimize'.")

        request = seating_model.SeatingChartRequest.model_validate(message_data.get("payload") or {})
        if not request.students:
            raise ValueError(NO_STUDENTS_MESSAGE)

        result = await seating_service.generate_seating_chart(
            request.students, request.classroomLayout, on_progress=send_progress
        )
        await websocket.send_json({"type": "result", "payload": result.model_dump(mode="json")})
        await websocket.close()
    except WebSocketDisconnect:
        print("Client disconnected from seating progress socket.")
    except ValueError as e:
        # Covers malformed JSON and request validation errors as well.
        await websocket.send_json({"type": "error", "payload": {"message": str(e)}})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
    except Exception as e:
        print(f"An unexpected error occurred in the seating WebSocket: {e}")
        try:
            await websocket.send_json({
                "type": "error",
                "payload": {"message": "A server error occurred. Please try again."}
            })
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        except Exception as ws_error:
            print(f"Failed to send seating error over WebSocket: {ws_error}")
