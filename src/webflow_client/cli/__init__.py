"""Capa de presentación: comandos Typer y componentes Rich."""
