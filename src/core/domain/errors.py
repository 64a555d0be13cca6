"""Errores del dominio.

Por qué una taxonomía mínima:
- El Core solo distingue "falló una etapa de fetch" de "el usuario escribió
  un número de página inválido".
- La causa real (status HTTP, JSON roto, timeout) viaja en `cause` para los
  logs, nunca para el usuario.
"""

from __future__ import annotations


FETCH_FAILED_MESSAGE = "Error fetching Pokémon data. Please try again later."


class CatalogError(Exception):
    """Base de todos los errores que emite el Core."""


class FetchFailed(CatalogError):
    """Una etapa de la cadena de lookups no pudo completarse."""

    def __init__(
        self,
        stage: str,
        locator: str | None = None,
        cause: BaseException | str | None = None,
    ) -> None:
        self.stage = stage
        self.locator = locator
        self.cause = cause
        detail = f"{stage} fetch failed"
        if locator:
            detail += f" ({locator})"
        if cause is not None:
            detail += f": {cause}"
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return FETCH_FAILED_MESSAGE


class ValidationFailed(CatalogError):
    """Entrada de usuario rechazada antes de llegar a la red."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
