"""Módulo analysis: Índice HMPI, niveles de riesgo, agregaciones y alertas."""

from hmpi_dashboard.analysis.aggregation import (
    build_analytics,
    metal_summary,
    risk_distribution,
    time_series,
)
from hmpi_dashboard.analysis.alerts import evaluate_project_alerts
from hmpi_dashboard.analysis.scoring import calculate_hmpi, get_risk_level, score_samples

__all__ = [
    "build_analytics",
    "calculate_hmpi",
    "evaluate_project_alerts",
    "get_risk_level",
    "metal_summary",
    "risk_distribution",
    "score_samples",
    "time_series",
]
