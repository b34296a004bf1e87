"""Servicios: capa de endpoints (`Webflow`) y aumentado de respuestas."""
