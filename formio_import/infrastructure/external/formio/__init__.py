"""
Integracion de solo lectura con Form.io (formularios y traducciones).
"""
