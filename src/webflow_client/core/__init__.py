"""Core del cliente: configuración, dominio, contratos y servicios.

El Core no conoce la CLI; los adaptadores (HTTP, exportadores) dependen de él.
"""
