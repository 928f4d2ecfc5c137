"""Plantilla de importación masiva y carga de muestras desde CSV."""

from typing import Any, Dict, List, Optional

import pandas as pd

from hmpi_dashboard.core.constants import TEMPLATE_HEADERS, TEMPLATE_ROWS
from hmpi_dashboard.core.models import Sample

# Columna de plantilla -> campo de Sample
COLUMN_MAP = {
    "SampleID": "sampleId",
    "ProjectID": "projectId",
    "District": "district",
    "City": "city",
    "Latitude": "latitude",
    "Longitude": "longitude",
    "Metal": "metal",
    "Si": "Si",
    "Ii": "Ii",
    "Mi": "Mi",
    "Date": "date",
}
NUMERIC_COLUMNS = ["Latitude", "Longitude", "Si", "Ii", "Mi"]


def template_payload() -> Dict[str, Any]:
    """Encabezados y filas de ejemplo de la plantilla de importación."""
    return {"headers": list(TEMPLATE_HEADERS), "sampleData": [list(r) for r in TEMPLATE_ROWS]}


def write_template(path: str) -> None:
    """Escribe la plantilla de importación (encabezados + 2 filas de ejemplo) como CSV."""
    pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_HEADERS).to_csv(path, index=False)


def load_samples_csv(path: str, project_id: Optional[str] = None) -> List[Sample]:
    """Carga muestras desde un CSV con el formato de la plantilla.

    Las columnas numéricas se convierten con coerción (valores inválidos -> NaN) y
    se descartan filas sin metal.

    Args:
        path: Ruta al CSV
        project_id: Si se indica, conserva solo filas de ese ProjectID

    Returns:
        Lista de Sample; el id local es el SampleID de la fila

    Raises:
        ValueError: Si faltan columnas de la plantilla

    Example:
        >>> samples = load_samples_csv("plantilla.csv")  # doctest: +SKIP
        >>> samples[0].metal
        'Lead'
    """
    df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in TEMPLATE_HEADERS if c not in df.columns]
    if missing:
        raise ValueError(f"Faltan columnas en {path}: {', '.join(missing)}")

    df = df[TEMPLATE_HEADERS].copy()
    for col in ["SampleID", "ProjectID", "District", "City", "Metal", "Date"]:
        df[col] = df[col].fillna("").str.strip()
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df = df[df["Metal"] != ""]
    if project_id is not None:
        df = df[df["ProjectID"] == project_id]

    samples: List[Sample] = []
    for rec in df.rename(columns=COLUMN_MAP).to_dict(orient="records"):
        rec["id"] = rec["sampleId"]
        samples.append(Sample.from_record(rec))
    return samples


def insert_payload(sample: Sample) -> Dict[str, Any]:
    """Registro para insertar en el almacén (sin id, lo asigna el servidor)."""
    record = sample.to_record()
    record.pop("id", None)
    return record
