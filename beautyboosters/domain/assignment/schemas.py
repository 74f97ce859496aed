"""Assignment schemas"""

from typing import Optional

from pydantic import BaseModel, Field


class AssignmentLine(BaseModel):
    """A cart line and how many boosters it needs"""

    service_id: Optional[str] = None
    boosters: int = Field(default=1, ge=1, le=20)


class AutoAssignRequest(BaseModel):
    lines: list[AssignmentLine] = Field(min_length=1)
    location: Optional[str] = None


class AssignedBooster(BaseModel):
    id: str
    name: str
    location: str
    rating: Optional[float] = None

    class Config:
        from_attributes = True


class LineAssignment(BaseModel):
    line_index: int
    required: int
    boosters: list[AssignedBooster]
    complete: bool


class AutoAssignResponse(BaseModel):
    assignments: list[LineAssignment]
    all_assigned: bool


class ManualAddRequest(BaseModel):
    assigned: list[str] = []
    booster_id: str
    capacity: int = Field(ge=1, le=20)


class ManualRemoveRequest(BaseModel):
    assigned: list[str]
    position: int = Field(ge=0)
    capacity: int = Field(ge=1, le=20)


class ManualAssignmentResponse(BaseModel):
    assigned: list[str]
    complete: bool
