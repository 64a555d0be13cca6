"""
Shared fixtures for the test suite.

`FakePokeApi` serves PokeAPI-shaped JSON through `httpx.MockTransport`, so the
real adapter (`PokeApiCatalog`) is exercised end to end without network.
`GatedCatalog` is an in-memory `CatalogSource` whose lookups can be held open
with `asyncio.Event`s to force out-of-order completions.
"""
from __future__ import annotations

import asyncio
import json
import re
from typing import Any

import httpx
import pytest

from adapters.pokeapi import PokeApiCatalog
from core.config import AppSettings
from core.domain.models import (
    CatalogIndex,
    EntityDetail,
    EvolutionLineage,
    IndexEntry,
    LineageNode,
    SpeciesDetail,
)

BASE = "https://pokeapi.test/api/v2"

NAMES = {
    1: "bulbasaur",
    2: "ivysaur",
    3: "venusaur",
    4: "charmander",
    25: "pikachu",
    83: "farfetchd",
    133: "eevee",
    134: "vaporeon",
    135: "jolteon",
    136: "flareon",
}

_ROUTE = re.compile(rf"^{re.escape(BASE)}/(pokemon|pokemon-species|evolution-chain|pokedex)/(\d+)/$")


def name_of(i: int) -> str:
    return NAMES.get(i, f"mon-{i}")


def species_url(i: int) -> str:
    return f"{BASE}/pokemon-species/{i}/"


def pokemon_url(i: int) -> str:
    return f"{BASE}/pokemon/{i}/"


def chain_url(i: int) -> str:
    return f"{BASE}/evolution-chain/{i}/"


def artwork_url(i: int) -> str:
    return f"https://img.test/artwork/{i}.png"


def pokemon_payload(i: int) -> dict[str, Any]:
    return {
        "id": i,
        "name": name_of(i),
        "height": 7,
        "weight": 690,
        "base_experience": 64,
        "sprites": {
            "front_default": f"https://img.test/sprites/{i}.png",
            "other": {"official-artwork": {"front_default": artwork_url(i)}},
        },
        "types": [
            {"slot": 1, "type": {"name": "grass", "url": f"{BASE}/type/12/"}},
            {"slot": 2, "type": {"name": "poison", "url": f"{BASE}/type/4/"}},
        ],
        "abilities": [
            {"ability": {"name": "overgrow", "url": f"{BASE}/ability/65/"}, "is_hidden": False, "slot": 1},
            {"ability": {"name": "chlorophyll", "url": f"{BASE}/ability/34/"}, "is_hidden": True, "slot": 3},
        ],
        "stats": [
            {"base_stat": 45, "effort": 0, "stat": {"name": "hp", "url": f"{BASE}/stat/1/"}},
            {"base_stat": 49, "effort": 0, "stat": {"name": "attack", "url": f"{BASE}/stat/2/"}},
            {"base_stat": 65, "effort": 1, "stat": {"name": "special-attack", "url": f"{BASE}/stat/4/"}},
        ],
        "moves": [
            {"move": {"name": "razor-wind", "url": f"{BASE}/move/13/"}},
            {"move": {"name": "vine-whip", "url": f"{BASE}/move/22/"}},
        ],
        "species": {"name": name_of(i), "url": species_url(i)},
    }


def species_payload(i: int, chain_id: int) -> dict[str, Any]:
    return {
        "name": name_of(i),
        "flavor_text_entries": [
            {
                "flavor_text": "Una semilla extraña.",
                "language": {"name": "es", "url": f"{BASE}/language/7/"},
            },
            {
                "flavor_text": "A strange seed was\fplanted on its\nback at birth.",
                "language": {"name": "en", "url": f"{BASE}/language/9/"},
            },
        ],
        "genera": [
            {"genus": "Pokémon Semilla", "language": {"name": "es", "url": f"{BASE}/language/7/"}},
            {"genus": "Seed Pokémon", "language": {"name": "en", "url": f"{BASE}/language/9/"}},
        ],
        "evolution_chain": {"url": chain_url(chain_id)},
        "varieties": [
            {"is_default": True, "pokemon": {"name": name_of(i), "url": pokemon_url(i)}},
        ],
    }


def _link(node: tuple[int, list]) -> dict[str, Any]:
    i, children = node
    return {
        "species": {"name": name_of(i), "url": species_url(i)},
        "evolves_to": [_link(child) for child in children],
    }


class FakePokeApi:
    """In-memory PokeAPI. Unknown ids are generated on demand."""

    def __init__(self, total: int = 30) -> None:
        self.total = total
        self.overrides: dict[str, Any] = {}
        self.statuses: dict[str, int] = {}
        self.broken: set[str] = set()
        self.chain_of: dict[int, int] = {}
        self.requests: list[str] = []

    def link_chain(self, chain_id: int, tree: tuple[int, list]) -> None:
        """Register an evolution chain given as `(id, [children...])`."""

        self.overrides[chain_url(chain_id)] = {"id": chain_id, "chain": _link(tree)}
        stack = [tree]
        while stack:
            i, children = stack.pop()
            self.chain_of[i] = chain_id
            stack.extend(children)

    def fail(self, url: str, status: int = 500) -> None:
        self.statuses[url] = status

    def payload_for(self, url: str) -> Any | None:
        if url in self.overrides:
            return self.overrides[url]
        match = _ROUTE.match(url)
        if match is None:
            return None
        kind, raw_id = match.group(1), int(match.group(2))
        if kind == "pokedex":
            return {
                "id": raw_id,
                "name": "national",
                "pokemon_entries": [
                    {
                        "entry_number": i,
                        "pokemon_species": {"name": name_of(i), "url": species_url(i)},
                    }
                    for i in range(1, self.total + 1)
                ],
            }
        if kind == "pokemon":
            return pokemon_payload(raw_id)
        if kind == "pokemon-species":
            return species_payload(raw_id, self.chain_of.get(raw_id, raw_id))
        return {"id": raw_id, "chain": _link((raw_id, []))}

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url in self.statuses:
            return httpx.Response(self.statuses[url], json={"detail": "boom"})
        if url in self.broken:
            return httpx.Response(200, content=b"{not json")
        payload = self.payload_for(url)
        if payload is None:
            return httpx.Response(404, content=b"Not Found")
        return httpx.Response(200, content=json.dumps(payload).encode("utf-8"))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class GatedCatalog:
    """`CatalogSource` over plain models; lookups wait on optional gates."""

    def __init__(self, total: int = 60) -> None:
        self.total = total
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[key] = event
        return event

    async def _pass(self, key: str) -> None:
        event = self.gates.get(key)
        if event is not None:
            await event.wait()

    async def fetch_index(self) -> CatalogIndex:
        await self._pass("index")
        return CatalogIndex(
            entries=tuple(
                IndexEntry(entry_number=i, species_name=name_of(i), species_locator=f"mem://species/{i}")
                for i in range(1, self.total + 1)
            )
        )

    async def fetch_entity_by_id(self, entity_id: int) -> EntityDetail:
        return await self.fetch_entity(f"mem://pokemon/{entity_id}")

    async def fetch_entity(self, locator: str) -> EntityDetail:
        await self._pass(locator)
        i = int(locator.rsplit("/", 1)[1])
        return EntityDetail(
            id=i,
            name=name_of(i),
            image_url=artwork_url(i),
            type_names=("normal",),
            species_locator=f"mem://species/{i}",
        )

    async def fetch_species(self, locator: str) -> SpeciesDetail:
        await self._pass(locator)
        i = int(locator.rsplit("/", 1)[1])
        return SpeciesDetail(
            name=name_of(i),
            lineage_locator=f"mem://chain/{i}",
            variety_locators=(f"mem://pokemon/{i}",),
        )

    async def fetch_lineage(self, locator: str) -> EvolutionLineage:
        await self._pass(locator)
        i = int(locator.rsplit("/", 1)[1])
        return EvolutionLineage(
            id=i,
            root=LineageNode(species_name=name_of(i), species_locator=f"mem://species/{i}"),
        )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, catalog_base_url=BASE)


@pytest.fixture
def api() -> FakePokeApi:
    return FakePokeApi()


@pytest.fixture
def make_catalog(settings):
    """Build a `PokeApiCatalog` wired to a `FakePokeApi` transport."""

    def factory(fake: FakePokeApi, override: AppSettings | None = None) -> PokeApiCatalog:
        return PokeApiCatalog(override or settings, transport=fake.transport())

    return factory
