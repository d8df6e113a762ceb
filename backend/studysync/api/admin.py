import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from studysync.models.admin import (
    AdminLoginRequest,
    AdminStatusResponse,
    ResetRequest,
    RosterChangeResponse,
)
from studysync.services.admin_gate import AdminGate, RosterAdmin
from studysync.services.errors import (
    ConfirmationRequiredError,
    EmptyExportError,
    RecordNotFoundError,
)
from studysync.services.export_service import export_date, export_filename
from studysync.utils.dependencies import get_admin_gate, require_admin

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=AdminStatusResponse)
async def login(request: AdminLoginRequest, gate: AdminGate = Depends(get_admin_gate)):
    if not gate.login(request.passcode):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid passcode")
    return AdminStatusResponse(is_admin=True, message="Admin access granted")


@router.post("/logout", response_model=AdminStatusResponse)
async def logout(gate: AdminGate = Depends(get_admin_gate)):
    gate.logout()
    return AdminStatusResponse(is_admin=False, message="Logged out")


@router.get("/status", response_model=AdminStatusResponse)
async def admin_status(gate: AdminGate = Depends(get_admin_gate)):
    return AdminStatusResponse(is_admin=gate.is_active)


@router.delete("/roster/{identity}", response_model=RosterChangeResponse)
async def remove_student(identity: str, admin: RosterAdmin = Depends(require_admin)):
    try:
        await admin.remove(identity)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RosterChangeResponse(message="Student removed", remaining=len(admin.store))


@router.post("/roster/reset", response_model=RosterChangeResponse)
async def reset_roster(request: ResetRequest, admin: RosterAdmin = Depends(require_admin)):
    """
    Clear every assignment. The request must carry ``confirm: true``.
    """
    try:
        await admin.clear(confirm=request.confirm)
    except ConfirmationRequiredError as e:
        logger.warning("Roster reset requested without confirmation")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RosterChangeResponse(message="System Reset Successful", remaining=len(admin.store))


@router.get("/roster/export")
async def export_roster(admin: RosterAdmin = Depends(require_admin)):
    try:
        content = admin.export_csv()
    except EmptyExportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    filename = export_filename(export_date(admin.config.export_timezone))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
