"""
Servicios de aplicacion.

Contiene la logica reutilizable por los casos de uso de import
(normalizacion de traducciones y snapshots de publicacion).
"""
from formio_import.application.services.translation_normalizer import (
    NormalizedTranslations,
    normalize_submissions,
)
from formio_import.application.services.publication_snapshot_builder import PublicationSnapshotBuilder
