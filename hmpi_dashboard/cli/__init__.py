"""Módulo cli: Argumentos de línea de comandos."""

from hmpi_dashboard.cli.parser import parse_args

__all__ = ["parse_args"]
