"""Punto de entrada principal para el paquete hmpi_dashboard."""

import logging
from typing import List, Optional

from hmpi_dashboard.analysis import build_analytics, evaluate_project_alerts, score_samples
from hmpi_dashboard.cli import parse_args
from hmpi_dashboard.core import Project, Settings
from hmpi_dashboard.data import StoreError, SupabaseStore, create_sample, load_samples_csv, write_template
from hmpi_dashboard.data.loaders import insert_payload
from hmpi_dashboard.output import print_analytics

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Analiza un CSV de importación y muestra los datos de gráficos por proyecto.

    Con --write-template solo escribe la plantilla. Con --upload inserta además las
    muestras en el almacén configurado.

    Returns:
        Código de salida (0 ok, 1 error de entrada, 2 error del almacén)
    """
    args = parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")

    if args.write_template:
        write_template(args.write_template)
        logger.info(f"Plantilla escrita en {args.write_template}")
        return 0

    if not args.csv:
        logger.error("Indica --csv o --write-template")
        return 1

    try:
        samples = load_samples_csv(args.csv, project_id=args.project_id)
    except (OSError, ValueError) as e:
        logger.error(f"No se pudo leer {args.csv}: {e}")
        return 1

    project_ids = list(dict.fromkeys(s.projectId for s in samples))
    for project_id in project_ids:
        thresholds = {"HMPI": args.threshold} if args.threshold is not None else {}
        project = Project(id=project_id, name=project_id, policyMakerThresholds=thresholds)
        print_analytics(build_analytics(project, samples), args.format)

        for alert in evaluate_project_alerts(project, score_samples(samples)):
            logger.warning(f"[{alert['severity']}] {alert['message']}")

    if args.upload:
        try:
            store = SupabaseStore.from_settings(settings)
            for sample in samples:
                create_sample(store, insert_payload(sample))
        except (RuntimeError, StoreError) as e:
            logger.error(f"Carga al almacén interrumpida: {e}")
            return 2
        logger.info(f"{len(samples)} muestras insertadas")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
