"""
Configuracion de logging (loguru) para el import.

En modo DRY_RUN cada linea se prefija con "[DRYRUN] " para que nunca se
confunda la salida de una simulacion con la de una corrida real.
"""
import sys

from loguru import logger

from formio_import.core.config import Settings

DRY_RUN_PREFIX = "[DRYRUN] "

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[prefix]}<level>{message}</level>"
)


def setup_logging(settings: Settings) -> None:
    """
    Reconfigura los sinks de loguru segun la configuracion.

    - stderr siempre
    - LOG_FILE opcional, con rotacion y retencion
    """
    prefix = DRY_RUN_PREFIX if settings.DRY_RUN else ""
    logger.remove()
    logger.configure(extra={"prefix": prefix})
    logger.add(sys.stderr, format=LOG_FORMAT, level=settings.LOG_LEVEL)

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            format=LOG_FORMAT,
            rotation="500 MB",
            retention="10 days",
            level=settings.LOG_LEVEL,
        )
