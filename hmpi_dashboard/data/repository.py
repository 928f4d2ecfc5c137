"""Operaciones CRUD sobre las colecciones projects, samples, alerts y policies.

Política de errores:
    - Lecturas (fetch_*): registran el error y devuelven lista vacía, nunca lanzan.
      load_* devuelve además el error para distinguir "sin datos" de "falló".
    - Escrituras (create_*, acknowledge_alert, update_project_threshold): registran
      el error y lo propagan como StoreError.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

from hmpi_dashboard.core.constants import TABLE_ALERTS, TABLE_POLICIES, TABLE_PROJECTS, TABLE_SAMPLES
from hmpi_dashboard.core.models import Alert, Policy, Project, Sample
from hmpi_dashboard.data.store import StoreError, SupabaseStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FetchResult:
    """Resultado de lectura con estado explícito.

    Attributes:
        records: Registros leídos (vacío si hubo error)
        error: Error del almacén, None si la lectura fue exitosa
    """

    records: List[Any] = field(default_factory=list)
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _load(store: SupabaseStore, table: str, factory: Callable[[Dict[str, Any]], T]) -> FetchResult:
    try:
        rows = store.select(table)
    except StoreError as e:
        logger.error(f"Error fetching {table}: {e!r}")
        return FetchResult(records=[], error=e)
    try:
        records = [factory(r) for r in rows]
    except (AttributeError, TypeError, ValueError) as e:
        err = StoreError(f"Malformed row in {table}: {e}")
        logger.error(f"Error fetching {table}: {err!r}")
        return FetchResult(records=[], error=err)
    return FetchResult(records=records)


def _insert_one(store: SupabaseStore, table: str, data: Dict[str, Any], factory: Callable[[Dict[str, Any]], T]) -> T:
    try:
        rows = store.insert(table, data)
    except StoreError as e:
        logger.error(f"Error creating record in {table}: {e!r}")
        raise
    if not rows:
        logger.error(f"Insert into {table} returned no rows")
        raise StoreError(f"Insert into {table} returned no rows")
    return factory(rows[0])


def load_projects(store: SupabaseStore) -> FetchResult:
    return _load(store, TABLE_PROJECTS, Project.from_record)


def load_samples(store: SupabaseStore) -> FetchResult:
    return _load(store, TABLE_SAMPLES, Sample.from_record)


def load_alerts(store: SupabaseStore) -> FetchResult:
    return _load(store, TABLE_ALERTS, Alert.from_record)


def load_policies(store: SupabaseStore) -> FetchResult:
    return _load(store, TABLE_POLICIES, Policy.from_record)


def fetch_projects(store: SupabaseStore) -> List[Project]:
    """Lee todos los proyectos; lista vacía si el almacén falla."""
    return load_projects(store).records


def fetch_samples(store: SupabaseStore) -> List[Sample]:
    """Lee todas las muestras; lista vacía si el almacén falla."""
    return load_samples(store).records


def fetch_alerts(store: SupabaseStore) -> List[Alert]:
    """Lee todas las alertas; lista vacía si el almacén falla."""
    return load_alerts(store).records


def fetch_policies(store: SupabaseStore) -> List[Policy]:
    """Lee todas las políticas; lista vacía si el almacén falla."""
    return load_policies(store).records


def create_project(store: SupabaseStore, project_data: Dict[str, Any]) -> Project:
    """Inserta un proyecto y devuelve el registro con id y createdAt del servidor.

    Raises:
        StoreError: Si el almacén rechaza la inserción
    """
    return _insert_one(store, TABLE_PROJECTS, project_data, Project.from_record)


def create_sample(store: SupabaseStore, sample_data: Dict[str, Any]) -> Sample:
    """Inserta una muestra.

    Raises:
        StoreError: Si el almacén rechaza la inserción
    """
    return _insert_one(store, TABLE_SAMPLES, sample_data, Sample.from_record)


def create_policy(store: SupabaseStore, policy_data: Dict[str, Any]) -> Policy:
    """Inserta una política.

    Raises:
        StoreError: Si el almacén rechaza la inserción
    """
    return _insert_one(store, TABLE_POLICIES, policy_data, Policy.from_record)


def create_alert(store: SupabaseStore, alert_data: Dict[str, Any]) -> Alert:
    return _insert_one(store, TABLE_ALERTS, alert_data, Alert.from_record)


def acknowledge_alert(store: SupabaseStore, alert_id: str) -> Optional[Alert]:
    """Marca una alerta como reconocida (acknowledged=True).

    Es idempotente: reconocer una alerta ya reconocida la deja igual.

    Args:
        store: Almacén
        alert_id: Id de la alerta

    Returns:
        La alerta actualizada, o None si ninguna fila coincide con el id

    Raises:
        StoreError: Si el almacén rechaza la actualización
    """
    try:
        rows = store.update(TABLE_ALERTS, {"acknowledged": True}, {"id": alert_id})
    except StoreError as e:
        logger.error(f"Error acknowledging alert {alert_id}: {e!r}")
        raise
    return Alert.from_record(rows[0]) if rows else None


def update_project_threshold(
    store: SupabaseStore, project_id: str, thresholds: Dict[str, Any]
) -> Optional[Project]:
    """Reemplaza completo el objeto policyMakerThresholds de un proyecto.

    No se mezclan campos: las claves ausentes en `thresholds` desaparecen.

    Returns:
        El proyecto actualizado, o None si ninguna fila coincide con el id

    Raises:
        StoreError: Si el almacén rechaza la actualización
    """
    try:
        rows = store.update(TABLE_PROJECTS, {"policyMakerThresholds": dict(thresholds)}, {"id": project_id})
    except StoreError as e:
        logger.error(f"Error updating project threshold {project_id}: {e!r}")
        raise
    return Project.from_record(rows[0]) if rows else None
