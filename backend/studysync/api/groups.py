from fastapi import APIRouter, Depends, Response

from studysync.config import Settings
from studysync.models.group import GroupListResponse, GroupResponse, RosterSummaryResponse
from studysync.services.overview_service import list_groups, roster_summary
from studysync.services.roster_store import RosterStore
from studysync.utils.dependencies import get_roster_store, get_settings

router = APIRouter()


@router.get("", response_model=GroupListResponse)
async def get_groups(
    response: Response,
    store: RosterStore = Depends(get_roster_store),
    config: Settings = Depends(get_settings),
):
    response.headers["Cache-Control"] = "no-store"
    groups = list_groups(store.snapshot(), config=config)
    return GroupListResponse(groups=[GroupResponse(**g) for g in groups])


@router.get("/summary", response_model=RosterSummaryResponse)
async def get_summary(
    store: RosterStore = Depends(get_roster_store),
    config: Settings = Depends(get_settings),
):
    return RosterSummaryResponse(**roster_summary(store.snapshot(), config=config))
