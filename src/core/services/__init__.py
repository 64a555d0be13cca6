"""Servicios del Core: orquestación de lookups sobre el catálogo."""
