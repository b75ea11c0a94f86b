"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (dataclasses y Pydantic v2).
- El dominio no conoce httpx ni la CLI: solo requests, respuestas y perfiles.
"""
