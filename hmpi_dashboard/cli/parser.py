"""Parser de argumentos de línea de comandos."""

import argparse
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parsea argumentos de línea de comandos para el análisis de archivos de importación.

    Args:
        argv: Argumentos (por defecto sys.argv[1:])

    Returns:
        Namespace con todos los argumentos parseados

    Example:
        >>> args = parse_args(["--csv", "muestras.csv", "--format", "json"])
        >>> args.csv
        'muestras.csv'
        >>> args.format
        'json'
    """
    p = argparse.ArgumentParser(description="Análisis HMPI de archivos de muestras (plantilla de importación).")

    # Archivo de datos
    p.add_argument("--csv", default=None, help="Ruta al CSV con el formato de la plantilla")
    p.add_argument("--project-id", default=None, help="Analizar solo este ProjectID (por defecto: todos)")
    p.add_argument("--write-template", default=None, help="Escribir la plantilla CSV en esta ruta y salir")

    # Salida
    p.add_argument(
        "--format",
        choices=["rich", "plain", "json"],
        default="rich",
        help="Formato de salida en consola",
    )
    p.add_argument("--threshold", type=float, default=None, help="Umbral HMPI para listar alertas")

    # Almacén
    p.add_argument("--upload", action="store_true", help="Insertar las muestras en el almacén (SUPABASE_URL/KEY)")

    return p.parse_args(argv)
