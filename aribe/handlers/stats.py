"""Stats Handler - Dashboard counters."""

from fastapi import APIRouter, Depends

from aribe.contracts.booking import ListingStats
from aribe.contracts.user import UserProfile
from aribe.core.booking import BookingWorkflow
from aribe.handlers.dependencies import get_current_user, get_workflow

router = APIRouter(prefix="/estatisticas", tags=["estatisticas"])


@router.get("", response_model=ListingStats)
async def get_stats(
    workflow: BookingWorkflow = Depends(get_workflow),
    user: UserProfile = Depends(get_current_user),
) -> ListingStats:
    """Pendentes/entregues; contadores de viagens só para administradores."""
    return await workflow.stats(include_trips=user.is_admin)
