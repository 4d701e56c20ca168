"""
Casos de uso de la aplicacion.
"""
from .form_import_use_cases import FormImportUseCases
from .global_translation_use_cases import GlobalTranslationUseCases
from .import_run_use_cases import ImportRunUseCases

__all__ = ["FormImportUseCases", "GlobalTranslationUseCases", "ImportRunUseCases"]
