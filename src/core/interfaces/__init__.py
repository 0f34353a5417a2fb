"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- El pipeline depende de abstracciones; los tests usan fakes en memoria.
"""
