"""Appointments Handler - Slots and pickup appointments (agendamentos)."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from aribe.contracts.appointment import Appointment, AppointmentForm, AppointmentStatusUpdate
from aribe.contracts.booking import AvailableSlots
from aribe.contracts.user import UserProfile
from aribe.core.booking import BookingWorkflow
from aribe.core.templates import get_template
from aribe.handlers.dependencies import get_current_user, get_workflow, require_admin
from aribe.handlers.responses import outcome_response
from aribe.services.observability import get_tracer
from aribe.services.whatsapp import MessageKind, build_whatsapp_link
from aribe.utils.logger import get_logger

router = APIRouter(prefix="/agendamentos", tags=["agendamentos"])
logger = get_logger(__name__)
tracer = get_tracer(__name__)


@router.get("/horarios", response_model=AvailableSlots)
async def list_available_slots(
    pickup_date: date = Query(..., alias="data", description="Data (YYYY-MM-DD)"),
    workflow: BookingWorkflow = Depends(get_workflow),
    user: UserProfile = Depends(get_current_user),
) -> AvailableSlots:
    """Horários livres para a data, já filtrados pela antecedência mínima."""
    return await workflow.slots_for(pickup_date)


@router.get("", response_model=list[Appointment])
async def list_appointments(
    workflow: BookingWorkflow = Depends(get_workflow),
    user: UserProfile = Depends(get_current_user),
) -> list[Appointment]:
    """Agendamentos: pendentes primeiro, depois por data e horário."""
    return await workflow.list_appointments()


@router.post("")
async def create_appointment(
    form: AppointmentForm,
    workflow: BookingWorkflow = Depends(get_workflow),
    user: UserProfile = Depends(get_current_user),
) -> JSONResponse:
    """Cadastra um agendamento.

    Returns:
        201 com o registro; 422 se o formulário for inválido; 409 se o
        horário acabou de ser reservado (com os horários recalculados);
        503 se o banco falhar.
    """
    with tracer.start_as_current_span("book_appointment") as span:
        span.set_attribute("user_id", user.id)
        if form.pickup_date:
            span.set_attribute("pickup_date", form.pickup_date.isoformat())

        outcome = await workflow.book_appointment(form)

        span.set_attribute("success", outcome.success)
        if outcome.error_kind:
            span.set_attribute("error_kind", outcome.error_kind.value)

    return outcome_response(outcome, status.HTTP_201_CREATED)


@router.patch("/{appointment_id}/status")
async def update_appointment_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> JSONResponse:
    """Marca como entregue ou volta para pendente."""
    outcome = await workflow.change_appointment_status(appointment_id, body.status)
    return outcome_response(outcome)


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    workflow: BookingWorkflow = Depends(get_workflow),
    admin: UserProfile = Depends(require_admin),
) -> JSONResponse:
    """Exclui um agendamento."""
    outcome = await workflow.delete_appointment(appointment_id)
    return outcome_response(outcome)


@router.get("/{appointment_id}/whatsapp")
async def whatsapp_link(
    appointment_id: str,
    kind: MessageKind = Query(MessageKind.INQUIRY, alias="tipo"),
    workflow: BookingWorkflow = Depends(get_workflow),
    user: UserProfile = Depends(get_current_user),
) -> dict:
    """Link wa.me com a mensagem pré-preenchida.

    O aviso de "moto pronta" (tipo=agendamento) é exclusivo de administradores.
    """
    if kind == MessageKind.PICKUP_READY and not user.is_admin:
        raise HTTPException(status.HTTP_403_FORBIDDEN, get_template("forbidden"))

    appointment = await workflow.get_appointment(appointment_id)
    link = build_whatsapp_link(appointment, kind)

    logger.info(
        "whatsapp_link_built",
        appointment_id=appointment_id,
        kind=kind.value,
    )
    return {"url": link, "tipo": kind.value}
