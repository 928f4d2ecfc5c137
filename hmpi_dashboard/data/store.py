"""Cliente HTTP para las colecciones del almacén Supabase (PostgREST)."""

import logging
from typing import Any, Dict, List, Optional

import requests

from hmpi_dashboard.core.config import Settings

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Error devuelto por el almacén o por el transporte HTTP.

    Attributes:
        message: Descripción del error
        code: Código de PostgREST (ej: "23505") si existe
        details: Detalle adicional del almacén
        status: Código HTTP, None si la petición no llegó a responder
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status = status

    def __repr__(self) -> str:
        return f"StoreError(message={self.message!r}, code={self.code!r}, status={self.status!r})"


class SupabaseStore:
    """Acceso genérico select/insert/update a tablas expuestas por PostgREST.

    Args:
        url: URL base del proyecto (ej: https://xyz.supabase.co)
        api_key: API key enviada en 'apikey' y como Bearer
        timeout: Timeout por petición en segundos
        session: Sesión requests a reutilizar (opcional)

    Example:
        >>> store = SupabaseStore("https://demo.supabase.co", "key")
        >>> rows = store.select("projects")  # doctest: +SKIP
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = url.rstrip("/") + "/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("SUPABASE_URL y SUPABASE_KEY son obligatorios")
        return cls(settings.supabase_url, settings.supabase_key, timeout=settings.store_timeout)

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Any = None,
        prefer: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        headers = {"Prefer": prefer} if prefer else None
        url = f"{self.base_url}/{table}"
        try:
            resp = self.session.request(
                method, url, params=params, json=json_body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise StoreError(f"{method} {table} falló: {e}") from e

        logger.debug(f"{method} {table} -> HTTP {resp.status_code}")
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            raise StoreError(
                body.get("message") or f"{method} {table} devolvió HTTP {resp.status_code}",
                code=body.get("code"),
                details=body.get("details"),
                status=resp.status_code,
            )

        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            raise StoreError(f"{method} {table} devolvió un cuerpo no JSON", status=resp.status_code) from e
        return data if isinstance(data, list) else [data]

    def select(self, table: str, columns: str = "*") -> List[Dict[str, Any]]:
        """Lee todas las filas de una tabla."""
        return self._request("GET", table, params={"select": columns})

    def insert(self, table: str, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Inserta una fila y devuelve las filas insertadas con campos del servidor."""
        return self._request("POST", table, json_body=[record], prefer="return=representation")

    def update(self, table: str, values: Dict[str, Any], match: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Actualiza filas que coinciden por igualdad y devuelve las filas afectadas."""
        params = {col: f"eq.{val}" for col, val in match.items()}
        return self._request("PATCH", table, params=params, json_body=values, prefer="return=representation")
