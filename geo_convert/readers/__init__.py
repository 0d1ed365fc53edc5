"""Readers for container and markup formats shared by the converters."""
