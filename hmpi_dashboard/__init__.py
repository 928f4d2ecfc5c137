"""
HMPI Dashboard - Monitoreo de calidad de agua por proyectos.

Este paquete calcula el Heavy Metal Pollution Index (HMPI) por muestra, clasifica el
riesgo y agrega los resultados en series listas para gráficos. Los registros se
leen y escriben en un almacén Supabase.
"""

__version__ = "1.0.0"
__author__ = "HMPI Dashboard Team"

from hmpi_dashboard.analysis.scoring import calculate_hmpi, get_risk_level
from hmpi_dashboard.core.models import Alert, Policy, Project, Sample

__all__ = ["Alert", "Policy", "Project", "Sample", "calculate_hmpi", "get_risk_level", "__version__"]
