"""Módulo data: Acceso al almacén externo y carga de archivos de importación."""

from hmpi_dashboard.data.loaders import load_samples_csv, template_payload, write_template
from hmpi_dashboard.data.repository import (
    FetchResult,
    acknowledge_alert,
    create_alert,
    create_policy,
    create_project,
    create_sample,
    fetch_alerts,
    fetch_policies,
    fetch_projects,
    fetch_samples,
    load_alerts,
    load_policies,
    load_projects,
    load_samples,
    update_project_threshold,
)
from hmpi_dashboard.data.store import StoreError, SupabaseStore

__all__ = [
    "FetchResult",
    "StoreError",
    "SupabaseStore",
    "acknowledge_alert",
    "create_alert",
    "create_policy",
    "create_project",
    "create_sample",
    "fetch_alerts",
    "fetch_policies",
    "fetch_projects",
    "fetch_samples",
    "load_alerts",
    "load_policies",
    "load_projects",
    "load_samples",
    "load_samples_csv",
    "template_payload",
    "update_project_threshold",
    "write_template",
]
