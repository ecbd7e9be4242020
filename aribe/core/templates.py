"""Message Templates - User-facing texts for the booking workflow.

Templates hold every Portuguese string the service returns to a user:
- Validation messages keyed by error code
- Success/failure messages of the booking workflow
- Outbound WhatsApp texts with placeholders
"""

from typing import Any

# Validation messages, one per ValidationErrorCode value
VALIDATION_MESSAGES: dict[str, str] = {
    "first_name_required": "Nome é obrigatório",
    "last_name_required": "Sobrenome é obrigatório",
    "phone_required": "Telefone é obrigatório",
    "model_required": "Modelo da moto é obrigatório",
    "color_required": "Cor é obrigatória",
    "chassis_required": "Chassi é obrigatório",
    "order_number_required": "Número do pedido é obrigatório",
    "pickup_date_required": "Data de retirada é obrigatória",
    "pickup_time_required": "Horário de retirada é obrigatório",
    "pickup_date_in_past": "A data de retirada deve ser hoje ou no futuro",
    "sunday_closed": "Não trabalhamos aos domingos. Selecione outro dia.",
    "minimum_notice": (
        "O agendamento deve ser feito com pelo menos 6 horas de antecedência"
    ),
    "outside_business_hours": "Horário fora do expediente para o dia selecionado",
    "origin_required": "Origem é obrigatória",
    "origin_invalid": "Origem inválida",
    "origin_other_required": "Especifique a origem",
    "destination_required": "Destino é obrigatório",
    "destination_invalid": "Destino inválido",
    "destination_other_required": "Especifique o destino",
}

TEMPLATES: dict[str, str] = {
    # Appointments
    "appointment_created": "Agendamento criado com sucesso!",
    "appointment_deleted": "Agendamento excluído com sucesso!",
    "appointment_delivered": "Entrega marcada como concluída!",
    "appointment_error": "Erro ao criar agendamento. Tente novamente.",
    "slot_taken": (
        "Este horário acabou de ser reservado por outro cliente. "
        "Por favor, selecione outro horário."
    ),
    # Trips
    "trip_created": "Viagem cadastrada com sucesso!",
    "trip_deleted": "Viagem excluída com sucesso!",
    "trip_completed": "Viagem marcada como concluída!",
    "trip_error": "Erro ao cadastrar viagem. Tente novamente.",
    # Shared
    "status_pending": "Status alterado para pendente",
    "not_found": "Registro não encontrado.",
    "forbidden": "Acesso restrito a administradores.",
    "unauthorized": "Sessão inválida. Faça login novamente.",
    "minimum_notice_banner": (
        "Os agendamentos devem ser feitos com pelo menos 6 horas de antecedência. "
        "Próximo horário disponível: após {cutoff}"
    ),
    # WhatsApp
    "whatsapp_pickup_ready": (
        "Olá {full_name}! Sua moto {model} (Pedido: {order_number}) está pronta "
        "para retirada. Entre em contato para combinarmos o melhor horário. "
        "Obrigado por escolher a {shop_name}!"
    ),
    "whatsapp_inquiry": (
        "Olá! Gostaria de obter informações sobre meu agendamento. "
        "Nome: {full_name}, Moto: {model}, Pedido: {order_number}"
    ),
    # Error handling
    "error": "Erro inesperado. Tente novamente.",
}


def get_template(template_key: str) -> str:
    """Get a template by its key.

    Args:
        template_key: Key of the template to retrieve.

    Returns:
        Template string, or error template if not found.
    """
    return TEMPLATES.get(template_key, TEMPLATES["error"])


def format_template(template_key: str, **context: Any) -> str:
    """Format a template with context data.

    Args:
        template_key: Key of the template.
        **context: Data to fill placeholders.

    Returns:
        Formatted template string.
    """
    template = get_template(template_key)
    try:
        return template.format(**context)
    except KeyError:
        # Missing placeholder - return template as-is
        return template


def validation_message(code: str) -> str:
    """Get the user-facing message for a validation error code."""
    return VALIDATION_MESSAGES[code]
