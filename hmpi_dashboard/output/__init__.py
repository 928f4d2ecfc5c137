"""Módulo output: Salida por consola y formateo."""

from hmpi_dashboard.output.console import print_analytics

__all__ = ["print_analytics"]
