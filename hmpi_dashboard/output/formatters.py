"""Funciones auxiliares de formateo para salida."""

from typing import Any


def format_number(value: Any, decimals: int = 2) -> str:
    """Formatea un número con N decimales, retorna '—' si no es válido.

    Args:
        value: Valor a formatear
        decimals: Número de decimales

    Returns:
        String formateado o '—'

    Example:
        >>> format_number(21.0049, 2)
        '21.00'
        >>> format_number(None, 2)
        '—'
    """
    try:
        return f"{float(value):.{decimals}f}"
    except (ValueError, TypeError):
        return "—"


def format_share(count: int, total: int) -> str:
    """Porcentaje de `count` sobre `total`, '0%' si total es 0.

    Example:
        >>> format_share(1, 4)
        '25%'
    """
    if total <= 0:
        return "0%"
    return f"{100.0 * count / total:.0f}%"
