"""Modelos de datos para el dashboard de calidad de agua."""

import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


def as_float(value: Any) -> float:
    """Convierte a float; valores ausentes o inválidos -> NaN."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def _json_safe(record: Dict[str, Any]) -> Dict[str, Any]:
    # NaN/inf no son JSON válido: se emiten como None
    return {
        k: (None if isinstance(v, float) and not math.isfinite(v) else v)
        for k, v in record.items()
    }


def _thresholds(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return {}
    return dict(raw) if isinstance(raw, dict) else {}


@dataclass
class RiskLevel:
    """Categoría de riesgo derivada del HMPI.

    Attributes:
        level: Etiqueta del nivel (ej: "High Risk")
        color: Color hexadecimal canónico del nivel
    """

    level: str
    color: str


@dataclass
class Project:
    """Campaña de monitoreo que agrupa muestras por ubicación.

    Attributes:
        id: Identificador asignado por el almacén
        name: Nombre visible
        description: Descripción libre
        district: Distrito
        city: Ciudad
        createdAt: Marca de creación (ISO)
        policyMakerThresholds: Umbrales configurables, ej: {"HMPI": 100}
    """

    id: str
    name: str = ""
    description: str = ""
    district: str = ""
    city: str = ""
    createdAt: Optional[str] = None
    policyMakerThresholds: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Project":
        return cls(
            id=str(record.get("id", "")),
            name=record.get("name") or "",
            description=record.get("description") or "",
            district=record.get("district") or "",
            city=record.get("city") or "",
            createdAt=record.get("createdAt"),
            policyMakerThresholds=_thresholds(record.get("policyMakerThresholds")),
        )

    def to_record(self) -> Dict[str, Any]:
        return _json_safe(asdict(self))


@dataclass
class Sample:
    """Muestra de agua con las tres concentraciones medidas para un metal.

    Attributes:
        id: Identificador asignado por el almacén
        projectId: Proyecto al que pertenece
        sampleId: Código de campo de la muestra (ej: "GNG-008")
        metal: Nombre del metal
        Si: Concentración medida
        Ii: Concentración ideal/estándar (debe ser distinta de cero)
        Mi: Concentración máxima permisible
        latitude: Latitud
        longitude: Longitud
        district: Distrito
        city: Ciudad
        date: Fecha de muestreo (ISO, ej: "2025-01-20")
    """

    id: str
    projectId: str
    metal: str
    Si: float
    Ii: float
    Mi: float
    sampleId: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    district: str = ""
    city: str = ""
    date: str = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Sample":
        lat = record.get("latitude")
        lon = record.get("longitude")
        return cls(
            id=str(record.get("id", "")),
            projectId=str(record.get("projectId", "")),
            metal=record.get("metal") or "",
            Si=as_float(record.get("Si")),
            Ii=as_float(record.get("Ii")),
            Mi=as_float(record.get("Mi")),
            sampleId=record.get("sampleId") or "",
            latitude=None if lat is None else as_float(lat),
            longitude=None if lon is None else as_float(lon),
            district=record.get("district") or "",
            city=record.get("city") or "",
            date=str(record.get("date") or ""),
        )

    def to_record(self) -> Dict[str, Any]:
        return _json_safe(asdict(self))


@dataclass
class Alert:
    """Alerta asociada a una muestra de un proyecto.

    Attributes:
        id: Identificador
        projectId: Proyecto
        sampleId: Muestra que originó la alerta
        message: Mensaje legible
        severity: "low", "medium" o "high"
        acknowledged: Si ya fue reconocida (solo pasa de False a True)
        createdAt: Marca de creación (ISO)
    """

    id: str
    projectId: str
    sampleId: str
    message: str
    severity: str = "low"
    acknowledged: bool = False
    createdAt: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Alert":
        return cls(
            id=str(record.get("id", "")),
            projectId=str(record.get("projectId", "")),
            sampleId=str(record.get("sampleId", "")),
            message=record.get("message") or "",
            severity=record.get("severity") or "low",
            acknowledged=bool(record.get("acknowledged", False)),
            createdAt=record.get("createdAt"),
        )

    def to_record(self) -> Dict[str, Any]:
        return _json_safe(asdict(self))


@dataclass
class Policy:
    """Política de umbral para un metal."""

    id: str
    name: str
    metal: str
    threshold: float
    createdBy: str = ""
    createdAt: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Policy":
        return cls(
            id=str(record.get("id", "")),
            name=record.get("name") or "",
            metal=record.get("metal") or "",
            threshold=as_float(record.get("threshold")),
            createdBy=str(record.get("createdBy") or ""),
            createdAt=record.get("createdAt"),
        )

    def to_record(self) -> Dict[str, Any]:
        return _json_safe(asdict(self))
