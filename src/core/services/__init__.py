"""Servicios del Core (ensure de credenciales y orquestación del run)."""
