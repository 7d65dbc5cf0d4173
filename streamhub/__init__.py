# streamhub/__init__.py
"""
StreamHub: backend REST para compartir videos (cuentas, videos, likes,
suscripciones, comentarios anidados, historial y notificaciones).
"""

__version__ = "0.1.0"
