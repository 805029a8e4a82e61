"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones y los tests
  inyectan fakes en memoria en lugar de SSM/IoT/nRF Cloud.
"""
