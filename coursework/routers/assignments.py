from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from coursework.core.actor import Actor
from coursework.core.current_user import get_current_actor
from coursework.core.deps import get_assignment_service, get_now
from coursework.core.errors import Conflict, Forbidden, NotFound, ServiceResult, ValidationError
from coursework.schemas.assignment import AssignmentCreate, AssignmentDetail, AssignmentRead, AssignmentUpdate
from coursework.schemas.envelope import Envelope
from coursework.services.assignment_service import AssignmentService

router = APIRouter()

ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    Conflict: status.HTTP_409_CONFLICT,
    ValidationError: 422,
}

ERROR_RESPONSES = {
    403: {"model": Envelope[None], "description": "Role or ownership check failed"},
    404: {"model": Envelope[None], "description": "Assignment or course not found"},
}


def _respond(result: ServiceResult, with_count: bool = False):
    if not result.success:
        error = result.error
        return JSONResponse(
            status_code=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
            content={"success": False, "message": error.message, "error": error.as_dict()},
        )

    body = {"success": True, "data": result.data, "message": result.message}
    if with_count:
        body["count"] = len(result.data)
    return body


@router.get("", response_model=Envelope[list[AssignmentRead]], response_model_exclude_none=True)
def list_assignments(
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    return _respond(service.list_assignments(actor, now), with_count=True)


@router.post(
    "",
    response_model=Envelope[AssignmentDetail],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_assignment(
    payload: AssignmentCreate,
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    return _respond(service.create_assignment(actor, payload, now))


@router.get(
    "/{assignment_id}",
    response_model=Envelope[AssignmentDetail],
    response_model_exclude_none=True,
    responses={404: ERROR_RESPONSES[404]},
)
def get_assignment(
    assignment_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    return _respond(service.get_assignment(actor, assignment_id, now))


@router.put(
    "/{assignment_id}",
    response_model=Envelope[AssignmentDetail],
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    return _respond(service.update_assignment(actor, assignment_id, payload, now))


@router.delete(
    "/{assignment_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def delete_assignment(
    assignment_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
):
    return _respond(service.delete_assignment(actor, assignment_id))


@router.post(
    "/{assignment_id}/submit",
    response_model=Envelope[AssignmentDetail],
    response_model_exclude_none=True,
    responses={
        **ERROR_RESPONSES,
        409: {"model": Envelope[None], "description": "Already submitted"},
    },
)
def submit_assignment(
    assignment_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    return _respond(service.submit(actor, assignment_id, now))
