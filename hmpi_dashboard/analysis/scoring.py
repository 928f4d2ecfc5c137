"""Cálculo del índice HMPI y clasificación de riesgo por muestra."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Tuple, Union

import pandas as pd

from hmpi_dashboard.core.constants import RISK_BANDS, SAFE_COLOR, SAFE_LEVEL
from hmpi_dashboard.core.models import RiskLevel, Sample, as_float

SCORED_COLUMNS = [
    "id",
    "projectId",
    "sampleId",
    "metal",
    "Si",
    "Ii",
    "Mi",
    "latitude",
    "longitude",
    "district",
    "city",
    "date",
    "hmpi",
    "risk_level",
    "risk_color",
]


def _ratios(sample: Union[Sample, Mapping[str, Any]]) -> Tuple[float, float, float]:
    if isinstance(sample, Mapping):
        return as_float(sample.get("Si")), as_float(sample.get("Ii")), as_float(sample.get("Mi"))
    return as_float(sample.Si), as_float(sample.Ii), as_float(sample.Mi)


def round_half_away(value: float, decimals: int = 2) -> float:
    """Redondea alejándose de cero en la mitad, sobre el valor escalado en binario.

    Valores no finitos se devuelven sin cambios.

    Example:
        >>> round_half_away(21.005)
        21.01
        >>> round_half_away(-1.005)
        -1.0
    """
    if not math.isfinite(value):
        return value
    factor = 10**decimals
    scaled = value * factor
    if abs(scaled) >= 2**52:
        # ya es entero en binario; quantize excedería la precisión de Decimal
        return value
    # Decimal(scaled) es el valor binario exacto: 0.49999999999999994 no sube a 1
    rounded = Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(rounded) / factor


def calculate_hmpi(sample: Union[Sample, Mapping[str, Any]]) -> float:
    """Calcula el Heavy Metal Pollution Index de una muestra.

    HMPI = (Si / Ii) * Mi * 100, redondeado a 2 decimales. Con Ii == 0 el índice
    no está definido y se devuelve NaN.

    Args:
        sample: Sample o mapping con claves 'Si', 'Ii' y 'Mi'

    Returns:
        Índice HMPI (float, posiblemente NaN)

    Example:
        >>> calculate_hmpi({"Si": 0.09, "Ii": 0.3, "Mi": 0.7})
        21.0
    """
    si, ii, mi = _ratios(sample)
    if ii == 0:
        return float("nan")
    return round_half_away((si / ii) * mi * 100)


def get_risk_level(index: float) -> RiskLevel:
    """Clasifica un HMPI en uno de los cinco niveles de riesgo.

    Los límites inferiores son inclusivos. NaN y valores negativos caen en "Safe".

    Example:
        >>> get_risk_level(50).level
        'High Risk'
        >>> get_risk_level(9.99).level
        'Safe'
    """
    for lower, level, color in RISK_BANDS:
        if index >= lower:
            return RiskLevel(level=level, color=color)
    return RiskLevel(level=SAFE_LEVEL, color=SAFE_COLOR)


def score_samples(samples: Iterable[Sample]) -> pd.DataFrame:
    """Anota cada muestra con su HMPI y nivel de riesgo.

    Args:
        samples: Muestras a evaluar

    Returns:
        DataFrame (una fila por muestra, en el orden de entrada) con las columnas de
        la muestra más 'hmpi', 'risk_level' y 'risk_color'
    """
    rows = []
    for s in samples:
        hmpi = calculate_hmpi(s)
        risk = get_risk_level(hmpi)
        row = s.to_record()
        row.update({"hmpi": hmpi, "risk_level": risk.level, "risk_color": risk.color})
        rows.append(row)
    return pd.DataFrame(rows, columns=SCORED_COLUMNS)
