"""Constantes globales: niveles de riesgo, colecciones y plantilla de importación."""

# Niveles de riesgo HMPI (umbral inferior inclusivo, etiqueta, color), de mayor a menor
RISK_BANDS = (
    (100.0, "Very High Risk", "#DC2626"),
    (50.0, "High Risk", "#EA580C"),
    (25.0, "Moderate Risk", "#D97706"),
    (10.0, "Low Risk", "#65A30D"),
)
SAFE_LEVEL = "Safe"
SAFE_COLOR = "#059669"

# Orden fijo para los gráficos de distribución
RISK_LEVEL_ORDER = ["Safe", "Low Risk", "Moderate Risk", "High Risk", "Very High Risk"]
RISK_COLORS = {SAFE_LEVEL: SAFE_COLOR, **{level: color for _, level, color in RISK_BANDS}}

# Severidad de alerta según nivel de riesgo
SEVERITY_BY_LEVEL = {
    "Very High Risk": "high",
    "High Risk": "medium",
}
DEFAULT_SEVERITY = "low"
ALERT_SEVERITIES = ("low", "medium", "high")

# Colecciones del almacén externo
TABLE_PROJECTS = "projects"
TABLE_SAMPLES = "samples"
TABLE_ALERTS = "alerts"
TABLE_POLICIES = "policies"

# Clave del umbral HMPI dentro de policyMakerThresholds
THRESHOLD_KEY = "HMPI"

# Plantilla de importación masiva de muestras
TEMPLATE_HEADERS = [
    "SampleID",
    "ProjectID",
    "District",
    "City",
    "Latitude",
    "Longitude",
    "Metal",
    "Si",
    "Ii",
    "Mi",
    "Date",
]
TEMPLATE_ROWS = [
    ["GNG-008", "p1", "Varanasi", "Varanasi", "25.3176", "82.9739", "Lead", "0.09", "0.3", "0.7", "2025-01-20"],
    ["YMN-006", "p2", "New Delhi", "Delhi", "28.7041", "77.1025", "Arsenic", "0.05", "0.2", "0.5", "2025-02-12"],
]

# Configuración por defecto
DEFAULT_STORE_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"
