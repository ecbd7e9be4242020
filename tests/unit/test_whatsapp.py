"""Unit Tests - WhatsApp deep links."""

from datetime import date, datetime, time, timezone
from urllib.parse import parse_qs, unquote, urlparse

import pytest

from aribe.contracts.appointment import Appointment, AppointmentStatus
from aribe.services.whatsapp import (
    MessageKind,
    build_message,
    build_whatsapp_link,
    normalize_phone,
)


@pytest.fixture
def appointment() -> Appointment:
    return Appointment(
        id="a1",
        full_name="João da Silva",
        phone="(79) 99999-1234",
        model="Honda CG 160",
        color="Vermelha",
        chassis="9C2KC2200NR000001",
        order_number="PED-1042",
        pickup_date=date(2026, 2, 18),
        pickup_time=time(9, 30),
        status=AppointmentStatus.PENDING,
        created_at=datetime(2026, 2, 16, tzinfo=timezone.utc),
    )


class TestNormalizePhone:
    """Tests for normalize_phone."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("(79) 99999-1234", "5579999991234"),
            ("79 9 9999 1234", "5579999991234"),
            ("+55 (79) 99999-1234", "5579999991234"),
            ("5579999991234", "5579999991234"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_phone(raw) == expected


class TestWhatsappLink:
    """Tests for build_whatsapp_link."""

    def test_pickup_ready_link(self, appointment: Appointment) -> None:
        """Digits in the path, encoded message in ?text=."""
        link = build_whatsapp_link(appointment, MessageKind.PICKUP_READY, "Aribé Motos")

        parsed = urlparse(link)
        text = parse_qs(parsed.query)["text"][0]

        assert parsed.netloc == "wa.me"
        assert parsed.path == "/5579999991234"
        assert text.startswith("Olá João da Silva!")
        assert "Honda CG 160" in text
        assert "Pedido: PED-1042" in text
        assert "Aribé Motos" in text

    def test_message_is_percent_encoded(self, appointment: Appointment) -> None:
        """No raw spaces or accented characters in the URL."""
        link = build_whatsapp_link(appointment, MessageKind.PICKUP_READY, "Aribé Motos")

        assert " " not in link
        assert "é" not in link
        assert "%20" in link
        assert unquote(link.split("?text=", 1)[1]) == build_message(
            appointment, MessageKind.PICKUP_READY, "Aribé Motos"
        )

    def test_inquiry_message(self, appointment: Appointment) -> None:
        text = build_message(appointment, MessageKind.INQUIRY)

        assert text.startswith("Olá! Gostaria de obter informações")
        assert "Nome: João da Silva" in text
        assert "Moto: Honda CG 160" in text
