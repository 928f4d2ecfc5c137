"""Módulo core: Modelos de datos, configuración y constantes globales."""

from hmpi_dashboard.core.config import Settings
from hmpi_dashboard.core.models import Alert, Policy, Project, RiskLevel, Sample

__all__ = ["Alert", "Policy", "Project", "RiskLevel", "Sample", "Settings"]
