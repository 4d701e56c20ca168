"""
Constantes del import de formularios.
Define los resultados posibles por formulario y los tags especiales.
"""
from enum import Enum


class FormImportStatus(str, Enum):
    """Resultado del import de un formulario."""
    SUCCESS = "success"
    FAILED = "failed"
    SKJEMANUMMER_TOO_LONG = "skjemanummer_too_long"
    SKIPPED_NO_PROPERTIES = "skipped_no_properties"


# Tag de traducciones globales cuyas keys son identificadores tecnicos
# (mensajes de validacion): su valor nb se guarda como NULL.
VALIDATION_TAG = "validering"

# Largo maximo del prefijo de key que se reporta en el resumen
TOO_LONG_KEY_PREFIX_LENGTH = 40
