"""Formatters - pt-BR display helpers."""

from datetime import date, datetime

WEEKDAY_NAMES = (
    "Segunda",
    "Terça",
    "Quarta",
    "Quinta",
    "Sexta",
    "Sábado",
    "Domingo",
)


def format_datetime(moment: datetime) -> str:
    """dd/mm/yyyy HH:MM."""
    return moment.strftime("%d/%m/%Y %H:%M")


def weekday_name(day: date) -> str:
    """Portuguese weekday name of `day`."""
    return WEEKDAY_NAMES[day.weekday()]
