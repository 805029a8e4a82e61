"""Core del bootstrap: dominio, contratos, configuración y servicios.

No importa boto3 ni httpx; eso vive en `adapters`.
"""
