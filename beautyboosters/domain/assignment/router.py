"""Assignment router - pick boosters for the lines of a cart"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AssignedBooster,
    AutoAssignRequest,
    AutoAssignResponse,
    LineAssignment,
    ManualAddRequest,
    ManualAssignmentResponse,
    ManualRemoveRequest,
)
from .service import AssignmentService, add_booster, remove_booster

router = APIRouter(prefix="/assignment", tags=["Assignment"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency injection for AssignmentService"""
    return AssignmentService(db)


@router.post("/auto", response_model=AutoAssignResponse)
async def auto_assign_boosters(
    data: AutoAssignRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Round-robin boosters over the cart lines"""
    result = service.auto_assign(data.lines, data.location)
    assignments = [
        LineAssignment(
            line_index=index,
            required=line.boosters,
            boosters=[AssignedBooster.model_validate(b) for b in chosen],
            complete=len(chosen) >= line.boosters,
        )
        for index, (line, chosen) in enumerate(zip(data.lines, result))
    ]
    return AutoAssignResponse(
        assignments=assignments, all_assigned=all(a.complete for a in assignments)
    )


@router.post("/add", response_model=ManualAssignmentResponse)
async def add_booster_to_line(data: ManualAddRequest):
    assigned = add_booster(data.assigned, data.booster_id, data.capacity)
    return ManualAssignmentResponse(assigned=assigned, complete=len(assigned) >= data.capacity)


@router.post("/remove", response_model=ManualAssignmentResponse)
async def remove_booster_from_line(data: ManualRemoveRequest):
    assigned = remove_booster(data.assigned, data.position)
    return ManualAssignmentResponse(assigned=assigned, complete=len(assigned) >= data.capacity)
