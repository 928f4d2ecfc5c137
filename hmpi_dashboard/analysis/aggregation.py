"""Agregaciones listas para gráficos a partir de muestras evaluadas."""

import math
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from hmpi_dashboard.analysis.scoring import score_samples
from hmpi_dashboard.core.constants import RISK_COLORS, RISK_LEVEL_ORDER
from hmpi_dashboard.core.models import Project, Sample


def _finite_or_none(value: Any) -> Optional[float]:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def risk_distribution(scored: pd.DataFrame) -> List[Dict[str, Any]]:
    """Cuenta muestras por nivel de riesgo en el orden fijo de los cinco niveles.

    Los niveles sin muestras se reportan con valor 0.

    Args:
        scored: DataFrame devuelto por score_samples

    Returns:
        Lista de {"name", "value", "color"}

    Example:
        >>> [d["value"] for d in risk_distribution(score_samples([]))]
        [0, 0, 0, 0, 0]
    """
    counts = scored["risk_level"].value_counts() if not scored.empty else pd.Series(dtype="int64")
    return [
        {"name": level, "value": int(counts.get(level, 0)), "color": RISK_COLORS[level]}
        for level in RISK_LEVEL_ORDER
    ]


def metal_summary(scored: pd.DataFrame) -> List[Dict[str, Any]]:
    """Agrupa por metal: cantidad de muestras y HMPI promedio.

    El orden sigue la primera aparición de cada metal. Si algún índice del grupo no
    está definido (Ii == 0), el promedio es None: count siempre cuenta todas las
    muestras y un promedio parcial no sería comparable con él.

    Args:
        scored: DataFrame devuelto por score_samples

    Returns:
        Lista de {"name", "count", "avgHMPI"}
    """
    if scored.empty:
        return []
    hmpi = pd.to_numeric(scored["hmpi"], errors="coerce")
    finite = hmpi.where(np.isfinite(hmpi))
    grouped = pd.DataFrame({"metal": scored["metal"], "hmpi": finite}).groupby("metal", sort=False, dropna=False)
    counts = grouped["hmpi"].size()
    defined = grouped["hmpi"].count()
    means = grouped["hmpi"].mean()
    return [
        {
            "name": metal,
            "count": int(counts[metal]),
            "avgHMPI": _finite_or_none(means[metal]) if defined[metal] == counts[metal] else None,
        }
        for metal in counts.index
    ]


def time_series(scored: pd.DataFrame) -> List[Dict[str, Any]]:
    """Serie temporal (fecha, HMPI) ordenada ascendentemente por fecha.

    El orden es estable ante empates; fechas no interpretables quedan al final.

    Args:
        scored: DataFrame devuelto por score_samples

    Returns:
        Lista de {"date", "hmpi"} con la fecha original de la muestra

    Example:
        >>> s1 = Sample(id="a", projectId="p1", metal="Lead", Si=1, Ii=1, Mi=1, date="2025-02-01")
        >>> s2 = Sample(id="b", projectId="p1", metal="Lead", Si=1, Ii=1, Mi=1, date="2025-01-01")
        >>> [p["date"] for p in time_series(score_samples([s1, s2]))]
        ['2025-01-01', '2025-02-01']
    """
    if scored.empty:
        return []
    parsed = pd.to_datetime(scored["date"], errors="coerce", utc=True, format="ISO8601")
    order = parsed.sort_values(kind="mergesort", na_position="last").index
    ordered = scored.loc[order]
    return [
        {"date": str(date), "hmpi": _finite_or_none(hmpi)}
        for date, hmpi in zip(ordered["date"], ordered["hmpi"])
    ]


def build_analytics(project: Project, samples: Iterable[Sample]) -> Dict[str, Any]:
    """Construye los datos de gráficos de un proyecto.

    Filtra las muestras por projectId, las evalúa y agrega.

    Args:
        project: Proyecto seleccionado
        samples: Todas las muestras disponibles (se filtran en memoria)

    Returns:
        Diccionario con el proyecto, cantidad de muestras y las tres series de gráficos
    """
    own = [s for s in samples if s.projectId == project.id]
    scored = score_samples(own)
    return {
        "project": project.to_record(),
        "sampleCount": len(own),
        "riskChartData": risk_distribution(scored),
        "metalChartData": metal_summary(scored),
        "timeSeriesData": time_series(scored),
    }
