"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos (Pydantic v2), la jerarquía de errores
  y las entidades aumentadas.
- El dominio no conoce la CLI: solo conceptos de la API remota.
"""
