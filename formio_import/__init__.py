"""
Import de formularios y traducciones: Form.io -> PostgreSQL.

Este paquete está diseñado para ejecutarse como job, no como servicio.

Objetivos de diseño:
- Idempotencia: se puede ejecutar N veces sin duplicar datos.
- Append-only: las filas confirmadas nunca se modifican; se agregan revisiones.
- Atomicidad por formulario: un fallo solo revierte su propio formulario.
"""

__version__ = "1.0.0"
