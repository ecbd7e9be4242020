"""Aribé Motos - Agendamento de retiradas e viagens entre lojas."""
