"""Adaptador HTTP del catálogo (PokeAPI v2).

Implementa `core.interfaces.catalog.CatalogSource`.

Reglas:
- Un único `httpx.AsyncClient` por instancia (se abre con `async with`).
- Toda respuesta no-2xx, error de transporte, JSON inválido o payload que no
  valida se convierte en `FetchFailed(stage, locator, cause)`.
"""

from __future__ import annotations

import logging
from typing import Any, Union

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from adapters.pokeapi_models import (
    EvolutionChainPayload,
    PokedexPayload,
    PokemonPayload,
    SpeciesPayload,
)
from core.config import AppSettings
from core.domain.errors import FetchFailed
from core.domain.models import (
    CatalogIndex,
    EntityDetail,
    EvolutionLineage,
    SpeciesDetail,
)

logger = logging.getLogger(__name__)

_Payload = Union[PokedexPayload, PokemonPayload, SpeciesPayload, EvolutionChainPayload]


class PokeApiCatalog:
    """Catálogo remoto de solo lectura sobre PokeAPI."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.catalog_base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_async_client(self._settings, transport=self._transport)
        return self._client

    async def __aenter__(self) -> "PokeApiCatalog":
        self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def index_locator(self) -> str:
        return f"{self._base_url}/pokedex/{self._settings.index_pokedex}/"

    def entity_locator_for(self, entity_id: int) -> str:
        return f"{self._base_url}/pokemon/{entity_id}/"

    async def get_json(self, locator: str, *, stage: str) -> Any:
        client = self._ensure_client()
        try:
            resp = await client.get(locator)
        except httpx.HTTPError as exc:
            raise FetchFailed(stage, locator, exc) from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise FetchFailed(stage, locator, f"HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise FetchFailed(stage, locator, exc) from exc

    async def _fetch(self, locator: str, payload_type: type[_Payload], *, stage: str) -> Any:
        data = await self.get_json(locator, stage=stage)
        try:
            # `to_domain` también valida (rangos de stats, ids >= 1).
            result = payload_type.model_validate(data).to_domain()
        except ValidationError as exc:
            raise FetchFailed(stage, locator, exc) from exc
        logger.debug("fetched %s %s", stage, locator)
        return result

    async def fetch_index(self) -> CatalogIndex:
        return await self._fetch(self.index_locator, PokedexPayload, stage="index")

    async def fetch_entity_by_id(self, entity_id: int) -> EntityDetail:
        return await self.fetch_entity(self.entity_locator_for(entity_id))

    async def fetch_entity(self, locator: str) -> EntityDetail:
        return await self._fetch(locator, PokemonPayload, stage="entity")

    async def fetch_species(self, locator: str) -> SpeciesDetail:
        return await self._fetch(locator, SpeciesPayload, stage="species")

    async def fetch_lineage(self, locator: str) -> EvolutionLineage:
        return await self._fetch(locator, EvolutionChainPayload, stage="lineage")
