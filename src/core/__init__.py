"""Núcleo: dominio, configuración y servicios sin I/O concreto."""
