"""Adaptadores de I/O: transporte HTTP (httpx) y exportación JSON."""
