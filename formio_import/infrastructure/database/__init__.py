"""
Configuración de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from formio_import.infrastructure.database.models import (
    FormModel,
    FormRevisionModel,
    FormTranslationModel,
    FormTranslationRevisionModel,
    GlobalTranslationModel,
    GlobalTranslationRevisionModel,
    PublishedFormTranslationModel,
    PublishedFormTranslationRevisionModel,
    PublishedGlobalTranslationModel,
    PublishedGlobalTranslationRevisionModel,
    FormPublicationModel,
)
