"""
Excepciones del import.

Politica de propagacion:
- SourceUnavailableException y GlobalPersistenceException abortan la corrida.
- InvalidFormPayloadException y PersistenceException se aislan en el formulario afectado.
- Los rechazos de validacion (skjemanummer / valores demasiado largos) no son
  excepciones: se registran en el resumen de la corrida.
"""
from typing import Any, Optional

from formio_import.shared.exceptions.base import AppException


class ConfigurationException(AppException):
    """Excepción cuando falta configuración obligatoria."""

    def __init__(self, setting: str):
        super().__init__(
            message=f"Falta variable de entorno obligatoria: {setting}",
            error_code="CONFIGURATION_ERROR",
            details={"setting": setting}
        )


class SourceUnavailableException(AppException):
    """Excepción cuando la fuente de contenido (Form.io) no responde correctamente."""

    def __init__(self, resource: str, reason: str, status_code: Optional[int] = None):
        super().__init__(
            message=f"Fallo al obtener {resource} de Form.io: {reason}",
            error_code="SOURCE_UNAVAILABLE",
            details={"resource": resource, "status_code": status_code}
        )


class InvalidFormPayloadException(AppException):
    """Excepción cuando un formulario de Form.io no cumple el formato esperado."""

    def __init__(self, label: str, reason: str):
        super().__init__(
            message=f"[{label}] Payload de formulario invalido: {reason}",
            error_code="INVALID_FORM_PAYLOAD",
            details={"form": label}
        )


class PersistenceException(AppException):
    """Excepción cuando falla la unidad de trabajo de un formulario."""

    def __init__(self, skjemanummer: str, cause: Any):
        super().__init__(
            message=f"[{skjemanummer}] Fallo al persistir el formulario: {cause}",
            error_code="PERSISTENCE_ERROR",
            details={"skjemanummer": skjemanummer}
        )


class GlobalPersistenceException(AppException):
    """
    Excepción cuando falla la reconciliacion de traducciones globales.

    Es fatal para la corrida: la publicacion de cada formulario depende del
    snapshot global.
    """

    def __init__(self, cause: Any):
        super().__init__(
            message=f"Fallo al persistir traducciones globales: {cause}",
            error_code="GLOBAL_PERSISTENCE_ERROR",
        )
