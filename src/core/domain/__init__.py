"""Modelos y entidades del dominio.

Aquí viven las estructuras de datos puras (Pydantic v2) y el estado de carga.
El dominio no conoce HTTP, CLI ni consola.
"""
