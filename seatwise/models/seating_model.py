# /seatwise/models/seating_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, AliasChoices, ConfigDict, StrictFloat, StrictInt, field_validator
from typing import Dict, List, Optional, Union
from enum import Enum

# --- Enumerations ---
class FocusLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

class PlanSource(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"

class RunStage(str, Enum):
    START = "start"
    PRIMARY_ATTEMPTED = "primary_attempted"
    PRIMARY_ACCEPTED = "primary_accepted"
    FALLBACK_INVOKED = "fallback_invoked"
    VALIDATED = "validated"
    DONE = "done"

# --- Engine Input Models ---

class StudentProfile(BaseModel):
    """
    A student's assessment-derived attributes, constructed fresh for every
    assignment request and never mutated by the engine.

    The original assessment records used snake_case keys, so every field also
    accepts its snake_case spelling on the way in.
    """
    model_config = ConfigDict(frozen=True)

    studentId: str = Field(..., min_length=1, validation_alias=AliasChoices('studentId', 'student_id'))
    displayName: Optional[str] = Field(default=None, validation_alias=AliasChoices('displayName', 'display_name'))
    firstName: Optional[str] = Field(default=None, validation_alias=AliasChoices('firstName', 'first_name'))
    lastName: Optional[str] = Field(default=None, validation_alias=AliasChoices('lastName', 'last_name'))
    email: Optional[str] = None

    personalityType: Optional[str] = Field(default=None, validation_alias=AliasChoices('personalityType', 'personality_type'))
    learningStyle: Optional[str] = Field(default=None, validation_alias=AliasChoices('learningStyle', 'learning_style'))
    socialPreference: Optional[str] = Field(default=None, validation_alias=AliasChoices('socialPreference', 'social_preference'))
    peerInteraction: Optional[str] = Field(default=None, validation_alias=AliasChoices('peerInteraction', 'peer_interaction'))
    focusLevel: Optional[str] = Field(default=None, validation_alias=AliasChoices('focusLevel', 'focus_level'))
    noiseTolerance: Optional[str] = Field(default=None, validation_alias=AliasChoices('noiseTolerance', 'noise_tolerance'))
    movementNeeds: Optional[str] = Field(default=None, validation_alias=AliasChoices('movementNeeds', 'movement_needs'))
    specialNeeds: Optional[str] = Field(default=None, validation_alias=AliasChoices('specialNeeds', 'special_needs'))

class ClassroomLayout(BaseModel):
    # Non-positive dimensions are rejected by the engine, not here.
    model_config = ConfigDict(frozen=True)
    rows: int
    cols: int

class ProfileSummary(BaseModel):
    """The minimal projection of a profile both strategies work from."""
    studentId: str
    focusRank: int
    displayName: str

# --- Engine Output Models ---

class SeatAssignment(BaseModel):
    studentId: str
    row: int
    col: int
    reasoning: str = ""

class SeatingPlan(BaseModel):
    """
    The validated output of one engine run. Students without a seat are simply
    absent from `assignments`.
    """
    assignments: List[SeatAssignment] = Field(default_factory=list)
    overallStrategy: str = ""
    considerations: List[str] = Field(default_factory=list)
    potentialIssues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

class SeatingRun(BaseModel):
    """One engine run: the validated plan, which strategy produced it, and who was left without a seat."""
    plan: SeatingPlan
    source: PlanSource
    unseatedStudentIds: List[str] = Field(default_factory=list)

# --- External Optimizer Response Contract ---
# Strict mode: a payload with wrong types is a failed attempt, never coerced.
# The one exception is a whole-number float seat coordinate such as 1.0, which
# JSON encoders emit for integers and which is read as the integer.

class OptimizerAssignment(BaseModel):
    model_config = ConfigDict(strict=True)
    studentId: str = Field(..., validation_alias=AliasChoices('studentId', 'student_id'))
    row: Union[StrictInt, StrictFloat]
    col: Union[StrictInt, StrictFloat]
    reasoning: str

    @field_validator('row', 'col')
    @classmethod
    def whole_number_seat(cls, value):
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"Seat coordinates must be whole numbers (got {value}).")
            return int(value)
        return value

class OptimizerResponse(BaseModel):
    model_config = ConfigDict(strict=True)
    assignments: List[OptimizerAssignment]
    overallStrategy: str = Field(..., validation_alias=AliasChoices('overallStrategy', 'overall_strategy'))
    considerations: List[str]
    potentialIssues: List[str] = Field(..., validation_alias=AliasChoices('potentialIssues', 'potential_issues'))
    recommendations: List[str]

    def to_plan(self) -> SeatingPlan:
        return SeatingPlan(
            assignments=[SeatAssignment(**a.model_dump()) for a in self.assignments],
            overallStrategy=self.overallStrategy,
            considerations=list(self.considerations),
            potentialIssues=list(self.potentialIssues),
            recommendations=list(self.recommendations),
        )

# --- Presentation & Persistence Shapes ---

class SeatPosition(BaseModel):
    row: int
    col: int
    studentId: Optional[str] = None
    studentName: Optional[str] = None

class ChartSeat(BaseModel):
    row: int
    col: int
    displayName: str

class SavedChartRecord(BaseModel):
    """The record an external persistence layer stores for a saved chart."""
    classroomLayout: ClassroomLayout
    studentAssignments: Dict[str, ChartSeat]
    rationaleText: str

# --- API Contract Models ---

class SeatingChartRequest(BaseModel):
    students: List[StudentProfile]
    classroomLayout: ClassroomLayout = Field(..., validation_alias=AliasChoices('classroomLayout', 'classroom_layout'))

class ChartRecordRequest(SeatingChartRequest):
    plan: SeatingPlan

class SeatingChartResult(BaseModel):
    plan: SeatingPlan
    source: PlanSource
    seats: List[SeatPosition]
    unseatedStudentIds: List[str]
    rationaleText: str

class StudentAnalysisRequest(BaseModel):
    studentData: StudentProfile = Field(..., validation_alias=AliasChoices('studentData', 'student_data'))

class StudentAnalysisResponse(BaseModel):
    analysis: str
    succeeded: bool
