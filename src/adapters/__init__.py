"""Adaptadores de infraestructura.

Por qué un paquete:
- Cada módulo implementa un contrato de `core.interfaces` contra un sistema
  real (nRF Cloud, SSM, AWS IoT, fichero de contexto).
"""
