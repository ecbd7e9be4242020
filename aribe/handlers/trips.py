"""Trips Handler - Inter-branch transfers (viagens). Administrators only."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from aribe.contracts.trip import TripForm, TripGroup, TripStatusUpdate
from aribe.contracts.user import UserProfile
from aribe.core.booking import BookingWorkflow
from aribe.handlers.dependencies import get_workflow, require_admin
from aribe.handlers.responses import outcome_response

router = APIRouter(prefix="/viagens", tags=["viagens"])


@router.get("", response_model=list[TripGroup])
async def list_trips(
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> list[TripGroup]:
    """Viagens agrupadas por destino."""
    return await workflow.list_trips()


@router.post("")
async def create_trip(
    form: TripForm,
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> JSONResponse:
    """Cadastra uma viagem."""
    outcome = await workflow.register_trip(form)
    return outcome_response(outcome, status.HTTP_201_CREATED)


@router.patch("/{trip_id}/status")
async def update_trip_status(
    trip_id: str,
    body: TripStatusUpdate,
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> JSONResponse:
    """Marca como concluída ou volta para pendente."""
    outcome = await workflow.change_trip_status(trip_id, body.status)
    return outcome_response(outcome)


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: str,
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> JSONResponse:
    """Exclui uma viagem."""
    outcome = await workflow.delete_trip(trip_id)
    return outcome_response(outcome)
