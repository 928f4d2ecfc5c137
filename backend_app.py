import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from hmpi_dashboard.analysis import build_analytics, evaluate_project_alerts, score_samples
from hmpi_dashboard.core import Settings
from hmpi_dashboard.data import (
    StoreError,
    SupabaseStore,
    acknowledge_alert,
    create_alert,
    create_policy,
    create_project,
    create_sample,
    fetch_alerts,
    fetch_policies,
    fetch_projects,
    fetch_samples,
    template_payload,
    update_project_threshold,
)

# Basic logging configuration for the API module
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="HMPI Dashboard - API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

STATIC_PATH = Path("web")
STORE: Optional[SupabaseStore] = None


def get_store() -> SupabaseStore:
    """Devuelve el almacén compartido, creándolo desde el entorno la primera vez."""
    global STORE
    if STORE is None:
        STORE = SupabaseStore.from_settings(Settings.from_env())
    return STORE


def _not_found(message: str) -> JSONResponse:
    return JSONResponse({"ok": False, "message": message}, status_code=404)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Errores de escritura del almacén -> 502."""
    return JSONResponse(
        {"ok": False, "message": exc.message, "code": exc.code, "details": exc.details},
        status_code=502,
    )


@app.get("/")
def index():
    file = STATIC_PATH / "index.html"
    if file.exists():
        return FileResponse(str(file))
    return JSONResponse({"ok": True, "message": "API Viva"})


# ============================================================================
# PROYECTOS
# ============================================================================


@app.get("/api/projects")
def list_projects():
    """Lista todos los proyectos (vacío si el almacén falla)."""
    return {"projects": [p.to_record() for p in fetch_projects(get_store())]}


@app.post("/api/projects", status_code=201)
def api_create_project(payload: Dict[str, Any] = Body(...)):
    """Crea un proyecto; devuelve el registro con campos del servidor."""
    return create_project(get_store(), payload).to_record()


@app.put("/api/projects/{project_id}/thresholds")
def api_update_thresholds(project_id: str, thresholds: Dict[str, Any] = Body(...)):
    """Reemplaza el objeto de umbrales completo del proyecto."""
    project = update_project_threshold(get_store(), project_id, thresholds)
    if project is None:
        return _not_found("Project not found")
    return project.to_record()


@app.get("/api/projects/{project_id}/analytics")
def project_analytics(project_id: str):
    """Datos de gráficos: distribución de riesgo, promedio por metal y tendencia HMPI."""
    store = get_store()
    projects = fetch_projects(store)
    samples = fetch_samples(store)

    project = next((p for p in projects if p.id == project_id), None)
    if project is None:
        return _not_found("Project not found")
    return build_analytics(project, samples)


@app.post("/api/projects/{project_id}/alerts/evaluate")
def evaluate_alerts(project_id: str, persist: bool = Query(False)):
    """Evalúa las muestras del proyecto contra su umbral HMPI.

    Las muestras con una alerta abierta (sin reconocer) no generan otra.
    Con persist=true inserta las alertas generadas en el almacén.
    """
    store = get_store()
    project = next((p for p in fetch_projects(store) if p.id == project_id), None)
    if project is None:
        return _not_found("Project not found")

    open_ids = {a.sampleId for a in fetch_alerts(store) if a.projectId == project_id and not a.acknowledged}
    own = [s for s in fetch_samples(store) if s.projectId == project_id]
    alerts = evaluate_project_alerts(project, score_samples(own), open_ids)
    if persist:
        alerts = [create_alert(store, a).to_record() for a in alerts]
    return {"alerts": alerts, "persisted": persist}


# ============================================================================
# MUESTRAS
# ============================================================================


@app.get("/api/samples")
def list_samples(project_id: Optional[str] = Query(None)):
    """Lista muestras, opcionalmente filtradas por proyecto."""
    samples = fetch_samples(get_store())
    if project_id is not None:
        samples = [s for s in samples if s.projectId == project_id]
    return {"samples": [s.to_record() for s in samples]}


@app.post("/api/samples", status_code=201)
def api_create_sample(payload: Dict[str, Any] = Body(...)):
    return create_sample(get_store(), payload).to_record()


@app.get("/api/template")
def get_template():
    """Plantilla de importación masiva (11 columnas + 2 filas de ejemplo)."""
    return template_payload()


# ============================================================================
# ALERTAS Y POLÍTICAS
# ============================================================================


@app.get("/api/alerts")
def list_alerts():
    return {"alerts": [a.to_record() for a in fetch_alerts(get_store())]}


@app.post("/api/alerts/{alert_id}/acknowledge")
def api_acknowledge_alert(alert_id: str):
    """Marca la alerta como reconocida (idempotente)."""
    alert = acknowledge_alert(get_store(), alert_id)
    if alert is None:
        return _not_found("Alert not found")
    return alert.to_record()


@app.get("/api/policies")
def list_policies():
    return {"policies": [p.to_record() for p in fetch_policies(get_store())]}


@app.post("/api/policies", status_code=201)
def api_create_policy(payload: Dict[str, Any] = Body(...)):
    return create_policy(get_store(), payload).to_record()
