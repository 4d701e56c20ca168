"""
CLI: Form.io -> Postgres (import de formularios y traducciones).

Uso recomendado:
  - Ejecutar como job (cron / pipeline de despliegue).

Variables de entorno:
  - FORMIO_BASE_URL (obligatoria)
  - DATABASE_URL (o DATABASE_HOST/PORT/USER/PASSWORD/NAME)
  - MAX_NUMBER_OF_FORMS, DRY_RUN, DB_POOL_SIZE, LOG_LEVEL, LOG_FILE

Ejecución:
  formio-import
  formio-import --dry-run
  formio-import --init-db --max-forms 50
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Optional, Sequence

from dotenv import load_dotenv
from loguru import logger

from formio_import.application.dto.import_dto import RunSummaryDTO
from formio_import.application.use_cases.import_run_use_cases import ImportRunUseCases
from formio_import.core.config import Settings, get_settings
from formio_import.core.logging import setup_logging
from formio_import.infrastructure.database.session import (
    close_db,
    create_engine,
    create_session_factory,
    init_db,
)
from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.shared.exceptions.domain import ConfigurationException


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Importa formularios y traducciones de Form.io a Postgres")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simula la corrida: lee y valida todo pero no escribe en la base de datos.",
    )
    parser.add_argument(
        "--max-forms",
        type=int,
        default=None,
        help="Numero maximo de formularios a obtener (override de MAX_NUMBER_OF_FORMS).",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Crea las tablas si no existen antes de importar (en produccion usar alembic).",
    )
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.dry_run:
        overrides["DRY_RUN"] = True
    if args.max_forms is not None:
        overrides["MAX_NUMBER_OF_FORMS"] = args.max_forms
    return settings.model_copy(update=overrides) if overrides else settings


def _validate_config(settings: Settings) -> None:
    """Valida que la configuracion critica este presente."""
    if not settings.FORMIO_BASE_URL:
        raise ConfigurationException("FORMIO_BASE_URL")


async def run_import(settings: Settings, *, create_tables: bool = False) -> RunSummaryDTO:
    """Construye las dependencias, ejecuta la corrida y libera recursos."""
    engine = create_engine(settings)
    try:
        if create_tables:
            await init_db(engine)
            logger.info("Base de datos inicializada")

        async with FormioClient(
            settings.FORMIO_BASE_URL,
            timeout_s=settings.HTTP_TIMEOUT_S,
            form_tag=settings.FORMIO_FORM_TAG,
            max_number_of_forms=settings.MAX_NUMBER_OF_FORMS,
            translations_limit=settings.TRANSLATIONS_LIMIT,
        ) as formio:
            use_cases = ImportRunUseCases(
                settings=settings,
                formio=formio,
                session_factory=create_session_factory(engine),
            )
            return await use_cases.run()
    finally:
        await close_db(engine)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = _parse_args(argv)
    settings = _apply_overrides(get_settings(), args)
    setup_logging(settings)

    try:
        _validate_config(settings)
    except ConfigurationException as e:
        logger.error(e.message)
        return 2

    if settings.DRY_RUN:
        logger.info("::::::::: DRY RUN ::::::::::")

    summary = RunSummaryDTO(dry_run=settings.DRY_RUN)
    try:
        summary = asyncio.run(run_import(settings, create_tables=args.init_db))
    except Exception as e:
        logger.exception("Error procesando formularios")
        summary.aborted_reason = str(e)
    finally:
        logger.info(f"Totales: {summary.counts}")
        print(summary.model_dump_json(indent=2))

    return 1 if summary.aborted_reason else 0


if __name__ == "__main__":
    raise SystemExit(main())
