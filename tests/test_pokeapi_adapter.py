"""Tests for adapters.pokeapi – wire parsing and uniform FetchFailed mapping."""
import httpx
import pytest

from adapters.pokeapi import PokeApiCatalog
from adapters.pokeapi_models import PokemonPayload, SpeciesPayload
from core.domain.errors import FetchFailed
from conftest import (
    BASE,
    FakePokeApi,
    artwork_url,
    chain_url,
    pokemon_url,
    species_url,
)


@pytest.mark.asyncio
async def test_index_lists_every_entry(api, make_catalog):
    async with make_catalog(api) as catalog:
        index = await catalog.fetch_index()
    assert index.total_count == 30
    assert index.entries[0].species_locator == species_url(1)
    assert api.requests == [f"{BASE}/pokedex/1/"]


@pytest.mark.asyncio
async def test_entity_parsing(api, make_catalog):
    async with make_catalog(api) as catalog:
        detail = await catalog.fetch_entity_by_id(1)
    assert detail.name == "bulbasaur"
    assert detail.image_url == artwork_url(1)
    assert detail.type_names == ("grass", "poison")
    assert [a.is_hidden for a in detail.abilities] == [False, True]
    assert [s.name for s in detail.stats] == ["hp", "attack", "special-attack"]
    assert detail.move_names == ("razor-wind", "vine-whip")
    assert detail.species_locator == species_url(1)


@pytest.mark.asyncio
async def test_species_parsing(api, make_catalog):
    async with make_catalog(api) as catalog:
        species = await catalog.fetch_species(species_url(1))
    assert species.lineage_locator == chain_url(1)
    assert species.default_variety_locator == pokemon_url(1)
    assert species.genus() == "Seed Pokémon"


@pytest.mark.asyncio
async def test_lineage_parsing(api, make_catalog):
    api.link_chain(1, (1, [(2, [(3, [])])]))
    async with make_catalog(api) as catalog:
        lineage = await catalog.fetch_lineage(chain_url(1))
    assert lineage.root.species_name == "bulbasaur"
    assert lineage.root.children[0].children[0].species_locator == species_url(3)


def test_default_variety_comes_first():
    payload = SpeciesPayload.model_validate(
        {
            "name": "x",
            "varieties": [
                {"is_default": False, "pokemon": {"name": "x-mega", "url": "u/mega"}},
                {"is_default": True, "pokemon": {"name": "x", "url": "u/base"}},
            ],
        }
    )
    assert payload.to_domain().variety_locators == ("u/base", "u/mega")


def test_missing_artwork_is_none():
    payload = PokemonPayload.model_validate(
        {"id": 10, "name": "x", "sprites": {"other": {}}, "species": {"name": "x", "url": "u"}}
    )
    assert payload.to_domain().image_url is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500, 503])
async def test_non_success_status_is_fetch_failed(api, make_catalog, status):
    api.fail(species_url(4), status)
    async with make_catalog(api) as catalog:
        with pytest.raises(FetchFailed) as info:
            await catalog.fetch_species(species_url(4))
    assert info.value.stage == "species"
    assert info.value.locator == species_url(4)


@pytest.mark.asyncio
async def test_malformed_json_is_fetch_failed(api, make_catalog):
    api.broken.add(pokemon_url(7))
    async with make_catalog(api) as catalog:
        with pytest.raises(FetchFailed) as info:
            await catalog.fetch_entity(pokemon_url(7))
    assert info.value.stage == "entity"


@pytest.mark.asyncio
async def test_schema_mismatch_is_fetch_failed(api, make_catalog):
    api.overrides[chain_url(9)] = {"id": 9, "chain": {"evolves_to": []}}
    async with make_catalog(api) as catalog:
        with pytest.raises(FetchFailed) as info:
            await catalog.fetch_lineage(chain_url(9))
    assert info.value.stage == "lineage"


@pytest.mark.asyncio
async def test_transport_error_is_fetch_failed(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with PokeApiCatalog(settings, transport=httpx.MockTransport(handler)) as catalog:
        with pytest.raises(FetchFailed) as info:
            await catalog.fetch_index()
    assert info.value.stage == "index"
    assert isinstance(info.value.cause, httpx.ConnectError)


def test_user_message_is_stage_agnostic():
    a = FetchFailed("index", "u1", "HTTP 500")
    b = FetchFailed("lineage", "u2", ValueError("bad"))
    assert a.user_message == b.user_message
    assert "lineage" in str(b)


def test_adapter_satisfies_catalog_protocol(settings):
    from core.interfaces.catalog import CatalogSource

    assert isinstance(PokeApiCatalog(settings, transport=FakePokeApi().transport()), CatalogSource)
