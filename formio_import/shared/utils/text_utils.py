"""
Utilidades para medir textos.
"""
from typing import Optional


class TextUtils:
    """Clase de utilidades para operaciones con textos."""

    @staticmethod
    def utf16_length(text: Optional[str]) -> int:
        """
        Largo de un texto en unidades UTF-16, como lo mide Form.io (JavaScript).

        Un caracter fuera del plano basico (p.ej. un emoji) cuenta como 2.
        """
        if not text:
            return 0
        return len(text.encode("utf-16-le")) // 2
