#!/usr/bin/env python
"""
Script para iniciar el servidor de HMPI Dashboard.

Inicia el backend FastAPI (puerto 8000) con las rutas de proyectos, muestras,
alertas, políticas y analíticas.

Uso:
    python start_server.py
    python start_server.py --port 8000 --reload
"""

import argparse
import logging
import subprocess
import sys
import threading
import webbrowser
from time import sleep

from hmpi_dashboard.core import Settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def check_settings(settings: Settings) -> bool:
    """Verifica que la conexión al almacén esté configurada."""
    required = {"SUPABASE_URL": settings.supabase_url, "SUPABASE_KEY": settings.supabase_key}
    missing = [name for name, value in required.items() if not value]
    if missing:
        logging.error(f"❌ Faltan variables de entorno: {', '.join(missing)}")
        logging.error("Defínelas en el entorno o en un archivo .env")
        return False
    logging.info("✅ Configuración del almacén verificada")
    return True


def build_command(port: int, reload: bool) -> list:
    cmd = ["uvicorn", "backend_app:app", "--host", "0.0.0.0", "--port", str(port)]
    if reload:
        cmd.append("--reload")
    return cmd


def start_server(port: int = 8000, reload: bool = False, open_browser: bool = True):
    """Inicia el servidor FastAPI con uvicorn."""
    if not check_settings(Settings.from_env()):
        sys.exit(1)

    logging.info("=" * 80)
    logging.info("💧 HMPI DASHBOARD - Servidor")
    logging.info("=" * 80)
    logging.info(f"📡 Iniciando servidor en puerto {port}...")
    logging.info(f"📚 API Docs: http://localhost:{port}/docs")
    logging.info(f"📊 Analíticas: http://localhost:{port}/api/projects/<id>/analytics")

    if open_browser:

        def open_browser_delayed():
            sleep(2)
            webbrowser.open(f"http://localhost:{port}/docs")

        threading.Thread(target=open_browser_delayed, daemon=True).start()

    cmd = build_command(port, reload)
    if reload:
        logging.info("🔄 Modo reload activado (auto-recarga en cambios)")
    logging.info(f"🚀 Ejecutando: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logging.info("🛑 Servidor detenido por el usuario")
    except subprocess.CalledProcessError as e:
        logging.error(f"❌ Error al iniciar servidor: {e}")
        sys.exit(1)


def main():
    """Función principal con argumentos CLI."""
    parser = argparse.ArgumentParser(
        description="Inicia el servidor de HMPI Dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:

  # Inicio básico
  python start_server.py

  # Con auto-reload (desarrollo)
  python start_server.py --reload

  # Puerto personalizado, sin abrir navegador
  python start_server.py --port 9000 --no-browser
        """,
    )
    parser.add_argument("--port", type=int, default=8000, help="Puerto del servidor (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload en cambios de código")
    parser.add_argument("--no-browser", action="store_true", help="No abrir navegador automáticamente")
    args = parser.parse_args()

    start_server(port=args.port, reload=args.reload, open_browser=not args.no_browser)


if __name__ == "__main__":
    main()
