"""Funciones para renderizar analíticas en consola (rich/plain/json)."""

import json
from typing import Dict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hmpi_dashboard.output.formatters import format_number, format_share


def print_analytics(analytics: Dict, console_format: str = "rich") -> None:
    """Renderiza los datos de gráficos de un proyecto.

    Args:
        analytics: Diccionario devuelto por build_analytics
        console_format: Formato de salida ("rich", "plain", "json")

    Example:
        >>> print_analytics(analytics, "json")  # doctest: +SKIP
    """
    if console_format == "json":
        print(json.dumps(analytics, ensure_ascii=False, indent=2))
        return

    if console_format == "rich":
        _print_rich_console(analytics)
        return

    _print_plain_console(analytics)


def _print_rich_console(analytics: Dict) -> None:
    """Imprime en formato rich con colores y tablas."""
    console = Console()
    project = analytics["project"]
    total = analytics["sampleCount"]

    console.rule(f"Analytics for {project.get('name') or project.get('id')}")
    console.print(Panel(f"Muestras: {total}", title="Proyecto"))

    rt = Table(show_header=True, header_style="bold")
    rt.add_column("Nivel de riesgo")
    rt.add_column("Muestras", justify="right")
    rt.add_column("%", justify="right")
    for entry in analytics["riskChartData"]:
        rt.add_row(
            f"[{entry['color']}]{entry['name']}[/]",
            str(entry["value"]),
            format_share(entry["value"], total),
        )
    console.print(Panel(rt, title="Distribución de riesgo"))

    mt = Table(show_header=True, header_style="bold")
    mt.add_column("Metal")
    mt.add_column("Muestras", justify="right")
    mt.add_column("HMPI promedio", justify="right")
    for entry in analytics["metalChartData"]:
        mt.add_row(str(entry["name"]), str(entry["count"]), format_number(entry["avgHMPI"]))
    console.print(Panel(mt, title="Contaminación por metal"))

    tt = Table(show_header=True, header_style="bold")
    tt.add_column("Fecha")
    tt.add_column("HMPI", justify="right")
    for point in analytics["timeSeriesData"]:
        tt.add_row(str(point["date"]), format_number(point["hmpi"]))
    console.print(Panel(tt, title="Tendencia HMPI"))


def _print_plain_console(analytics: Dict) -> None:
    """Imprime en formato plain text sin colores."""
    project = analytics["project"]
    total = analytics["sampleCount"]
    print(f"\n=== Analytics for {project.get('name') or project.get('id')} ===")
    print(f"Muestras: {total}")
    print("Distribución de riesgo:")
    for entry in analytics["riskChartData"]:
        print(f"  - {entry['name']}: {entry['value']} ({format_share(entry['value'], total)})")
    print("Contaminación por metal:")
    for entry in analytics["metalChartData"]:
        print(f"  - {entry['name']}: n={entry['count']} HMPI promedio={format_number(entry['avgHMPI'])}")
    print("Tendencia HMPI:")
    for point in analytics["timeSeriesData"]:
        print(f"  - {point['date']}: {format_number(point['hmpi'])}")
