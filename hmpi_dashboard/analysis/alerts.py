"""Evaluación de muestras contra el umbral HMPI configurado en el proyecto."""

import math
from typing import Dict, Iterable, List, Optional

import pandas as pd

from hmpi_dashboard.core.constants import DEFAULT_SEVERITY, SEVERITY_BY_LEVEL, THRESHOLD_KEY
from hmpi_dashboard.core.models import Project


def project_threshold(project: Project) -> Optional[float]:
    """Devuelve el umbral HMPI del proyecto, o None si no es numérico."""
    raw = (project.policyMakerThresholds or {}).get(THRESHOLD_KEY)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def severity_for(risk_level: str) -> str:
    return SEVERITY_BY_LEVEL.get(risk_level, DEFAULT_SEVERITY)


def evaluate_project_alerts(
    project: Project, scored: pd.DataFrame, open_sample_ids: Iterable[str] = ()
) -> List[Dict]:
    """Genera alertas para muestras cuyo HMPI alcanza el umbral del proyecto.

    Args:
        project: Proyecto con policyMakerThresholds["HMPI"]
        scored: DataFrame devuelto por score_samples (se filtra por projectId)
        open_sample_ids: Ids de muestras que ya tienen una alerta sin reconocer;
            no generan una alerta nueva

    Returns:
        Lista de payloads de alerta listos para insertar (sin id ni createdAt).
        La severidad sigue el nivel de riesgo: Very High -> high, High -> medium,
        resto -> low.
    """
    threshold = project_threshold(project)
    if threshold is None or scored.empty:
        return []

    own = scored[scored["projectId"] == project.id]
    hmpi = pd.to_numeric(own["hmpi"], errors="coerce")
    skip = set(open_sample_ids)
    breaches = own[(hmpi >= threshold) & ~own["id"].isin(skip)]

    alerts: List[Dict] = []
    for _, row in breaches.iterrows():
        label = row["sampleId"] or row["id"]
        alerts.append(
            {
                "projectId": project.id,
                "sampleId": row["id"],
                "message": (
                    f"Sample {label} ({row['metal']}) HMPI {row['hmpi']:.2f} "
                    f"reached the project threshold {threshold:g} ({row['risk_level']})"
                ),
                "severity": severity_for(row["risk_level"]),
                "acknowledged": False,
            }
        )
    return alerts
