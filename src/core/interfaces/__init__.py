"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los colaboradores externos: navegación
y avisos al usuario. El Core depende de estas abstracciones, no de la consola.
"""
