"""Modelos y errores del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) que
  describen un bundle `.framework`.
- El dominio no conoce subprocesos, CLI ni sistema de archivos.
"""
