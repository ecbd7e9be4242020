"""WhatsApp Links - Deep links to the customer's chat.

Messages are not sent by the service; staff open the wa.me link and send
the pre-filled text themselves.
"""

import re
from enum import Enum
from urllib.parse import quote

from aribe.config.settings import get_settings
from aribe.contracts.appointment import Appointment
from aribe.core.templates import format_template

WHATSAPP_BASE_URL = "https://wa.me"
COUNTRY_CODE = "55"


class MessageKind(str, Enum):
    """Tipos de mensagem pré-preenchida."""

    PICKUP_READY = "agendamento"
    INQUIRY = "consulta"


MESSAGE_TEMPLATES: dict[MessageKind, str] = {
    MessageKind.PICKUP_READY: "whatsapp_pickup_ready",
    MessageKind.INQUIRY: "whatsapp_inquiry",
}


def normalize_phone(phone: str) -> str:
    """Strip every non-digit, then prefix the country code unless present.

    Args:
        phone: Phone number with any formatting.

    Returns:
        Digits-only number starting with 55.
    """
    digits = re.sub(r"\D", "", phone)
    if not digits.startswith(COUNTRY_CODE):
        digits = f"{COUNTRY_CODE}{digits}"
    return digits


def build_message(
    appointment: Appointment,
    kind: MessageKind = MessageKind.PICKUP_READY,
    shop_name: str | None = None,
) -> str:
    """Render the pre-filled message text."""
    return format_template(
        MESSAGE_TEMPLATES[kind],
        full_name=appointment.full_name,
        model=appointment.model,
        order_number=appointment.order_number,
        shop_name=shop_name or get_settings().shop_name,
    )


def build_whatsapp_link(
    appointment: Appointment,
    kind: MessageKind = MessageKind.PICKUP_READY,
    shop_name: str | None = None,
) -> str:
    """Build the wa.me deep link for an appointment.

    Args:
        appointment: Appointment whose customer is contacted.
        kind: Which message template to use.
        shop_name: Overrides settings.shop_name in the text.

    Returns:
        https://wa.me/<digits>?text=<url-encoded message>
    """
    text = quote(build_message(appointment, kind, shop_name), safe="!~*'()")
    return f"{WHATSAPP_BASE_URL}/{normalize_phone(appointment.phone)}?text={text}"
