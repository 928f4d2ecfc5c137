"""Configuración leída desde variables de entorno (.env)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from hmpi_dashboard.core.constants import DEFAULT_LOG_LEVEL, DEFAULT_STORE_TIMEOUT

load_dotenv()


@dataclass
class Settings:
    """Parámetros de conexión al almacén y de logging.

    Attributes:
        supabase_url: URL base del proyecto Supabase
        supabase_key: API key (anon o service role)
        store_timeout: Timeout por petición en segundos
        log_level: Nivel de logging (ej: "INFO")
    """

    supabase_url: str
    supabase_key: str
    store_timeout: float = DEFAULT_STORE_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Construye la configuración desde el entorno.

        Variables: SUPABASE_URL, SUPABASE_KEY, STORE_TIMEOUT (s), LOG_LEVEL.
        """
        return cls(
            supabase_url=os.getenv("SUPABASE_URL", "").strip(),
            supabase_key=os.getenv("SUPABASE_KEY", "").strip(),
            store_timeout=float(os.getenv("STORE_TIMEOUT", str(DEFAULT_STORE_TIMEOUT))),
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
