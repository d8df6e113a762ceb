from fastapi import APIRouter, Depends, HTTPException, Response, status

from studysync.config import Settings
from studysync.models.assignment import RecordResponse
from studysync.models.registration import RegistrationRequest, RegistrationResponse
from studysync.services.assignment_engine import (
    AlreadyAssigned,
    Assigned,
    CapacityError,
    GroupsFullError,
    ValidationError,
)
from studysync.services.errors import SubmissionInProgressError
from studysync.services.overview_service import serialize_record
from studysync.services.registration_service import RegistrationService
from studysync.utils.dependencies import get_registration_service, get_settings

router = APIRouter()

_REJECTION_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CapacityError: status.HTTP_409_CONFLICT,
    GroupsFullError: status.HTTP_409_CONFLICT,
}


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegistrationRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
    config: Settings = Depends(get_settings),
):
    """
    Assign the student to a random open group, or return the group they already have.
    """
    try:
        outcome = await service.register(request.full_name, request.student_id)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if isinstance(outcome, (Assigned, AlreadyAssigned)):
        if isinstance(outcome, AlreadyAssigned):
            response.status_code = status.HTTP_200_OK
        record = outcome.record
        return RegistrationResponse(
            kind=outcome.kind,
            message=outcome.message,
            record=RecordResponse(**serialize_record(record)),
            group_link=config.whatsapp_links.get(record.group_number),
        )

    raise HTTPException(status_code=_REJECTION_STATUS[type(outcome)], detail=outcome.message)
