# /seatwise/services/seating_helpers/strategy.py

"""
The common shape of every seating strategy.

A strategy never raises for an external failure: it reports what happened
through a tagged StrategyResult, so the failover decision in the seating
service is an explicit branch on `outcome`.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel

from ...models.seating_model import StudentProfile, ClassroomLayout, SeatingPlan


class StrategyOutcome(str, Enum):
    OK = "ok"
    SCHEMA_ERROR = "schema_error"        # Payload did not match the response contract
    TRANSPORT_ERROR = "transport_error"  # Network, auth, or empty/non-success response
    TIMEOUT = "timeout"                  # The caller-enforced deadline expired


class StrategyResult(BaseModel):
    outcome: StrategyOutcome
    plan: Optional[SeatingPlan] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == StrategyOutcome.OK and self.plan is not None

    @classmethod
    def ok(cls, plan: SeatingPlan) -> "StrategyResult":
        return cls(outcome=StrategyOutcome.OK, plan=plan)

    @classmethod
    def failed(cls, outcome: StrategyOutcome, error: str) -> "StrategyResult":
        return cls(outcome=outcome, error=error)


class AssignmentStrategy:
    """Base class for the external optimizer and the deterministic packer."""

    name = "strategy"

    async def attempt(self, profiles: List[StudentProfile], layout: ClassroomLayout) -> StrategyResult:
        raise NotImplementedError
