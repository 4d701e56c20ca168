"""
Utilidades para manejo de fechas y horas.
"""
from datetime import datetime, timezone
from typing import Optional


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """Normaliza un datetime a UTC (aware). Los naive se asumen UTC."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def from_iso_string(iso_string: Optional[str]) -> Optional[datetime]:
        """
        Convierte un string ISO 8601 de Form.io a datetime UTC.

        Form.io devuelve timestamps con sufijo 'Z' (p.ej. "2024-03-01T10:15:00.000Z").

        Args:
            iso_string: String en formato ISO 8601

        Returns:
            Optional[datetime]: Objeto datetime o None si esta vacio o no se puede parsear
        """
        if not iso_string:
            return None
        try:
            parsed = datetime.fromisoformat(str(iso_string).replace("Z", "+00:00"))
        except (ValueError, TypeError):
            return None
        return DateTimeUtils.ensure_utc(parsed)
