from fastapi import Depends, HTTPException, Request, status

from studysync.config import Settings, settings
from studysync.services.admin_gate import AdminGate, RosterAdmin
from studysync.services.errors import AdminRequiredError
from studysync.services.registration_service import RegistrationService, SubmissionGate
from studysync.services.roster_store import RosterStore


def get_settings() -> Settings:
    return settings


def get_roster_store(request: Request) -> RosterStore:
    return request.app.state.roster_store


def get_admin_gate(request: Request) -> AdminGate:
    return request.app.state.admin_gate


def get_submission_gate(request: Request) -> SubmissionGate:
    return request.app.state.submission_gate


def get_registration_service(
    store: RosterStore = Depends(get_roster_store),
    gate: SubmissionGate = Depends(get_submission_gate),
    config: Settings = Depends(get_settings),
) -> RegistrationService:
    return RegistrationService(store, gate, config)


async def require_admin(
    gate: AdminGate = Depends(get_admin_gate),
    store: RosterStore = Depends(get_roster_store),
    config: Settings = Depends(get_settings),
) -> RosterAdmin:
    """
    Dependency that hands out the admin roster operations

    Raises:
        HTTPException: 403 while the admin gate is closed
    """
    try:
        return gate.capabilities(store, config)
    except AdminRequiredError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
