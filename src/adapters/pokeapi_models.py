"""Modelos del JSON de PokeAPI (wire format).

Idea:
- Validamos solo los campos que consumimos (`extra="ignore"`); un payload al
  que le falte algo de esto es un fetch fallido, no un dato a medias.
- `to_domain()` traduce al modelo del Core; el resto del sistema no ve
  nunca la forma anidada del API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import (
    AbilityEntry,
    CatalogIndex,
    EntityDetail,
    EvolutionLineage,
    IndexEntry,
    LineageNode,
    LocalizedText,
    SpeciesDetail,
    StatEntry,
)


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedResource(_Wire):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class LanguageRef(_Wire):
    name: str


class PokedexEntry(_Wire):
    entry_number: int
    pokemon_species: NamedResource


class PokedexPayload(_Wire):
    id: int | None = None
    name: str | None = None
    pokemon_entries: list[PokedexEntry] = Field(default_factory=list)

    def to_domain(self) -> CatalogIndex:
        return CatalogIndex(
            entries=tuple(
                IndexEntry(
                    entry_number=e.entry_number,
                    species_name=e.pokemon_species.name,
                    species_locator=e.pokemon_species.url,
                )
                for e in self.pokemon_entries
            )
        )


class ArtworkSprites(_Wire):
    front_default: str | None = None


class OtherSprites(_Wire):
    official_artwork: ArtworkSprites | None = Field(default=None, alias="official-artwork")


class Sprites(_Wire):
    front_default: str | None = None
    other: OtherSprites | None = None

    @property
    def artwork(self) -> str | None:
        if self.other and self.other.official_artwork:
            return self.other.official_artwork.front_default
        return None


class TypeSlot(_Wire):
    slot: int = 0
    type: NamedResource


class AbilitySlot(_Wire):
    ability: NamedResource
    is_hidden: bool = False


class StatSlot(_Wire):
    base_stat: int
    stat: NamedResource


class MoveSlot(_Wire):
    move: NamedResource


class PokemonPayload(_Wire):
    id: int
    name: str
    sprites: Sprites = Field(default_factory=Sprites)
    types: list[TypeSlot] = Field(default_factory=list)
    abilities: list[AbilitySlot] = Field(default_factory=list)
    stats: list[StatSlot] = Field(default_factory=list)
    height: int = 0
    weight: int = 0
    base_experience: int | None = None
    moves: list[MoveSlot] = Field(default_factory=list)
    species: NamedResource
    is_default: bool = True

    def to_domain(self) -> EntityDetail:
        return EntityDetail(
            id=self.id,
            name=self.name,
            image_url=self.sprites.artwork,
            type_names=tuple(t.type.name for t in self.types),
            abilities=tuple(
                AbilityEntry(name=a.ability.name, is_hidden=a.is_hidden) for a in self.abilities
            ),
            stats=tuple(StatEntry(name=s.stat.name, value=s.base_stat) for s in self.stats),
            height=self.height,
            weight=self.weight,
            base_experience=self.base_experience,
            move_names=tuple(m.move.name for m in self.moves),
            species_locator=self.species.url,
            is_default=self.is_default,
        )


class FlavorTextEntry(_Wire):
    flavor_text: str
    language: LanguageRef


class GenusEntry(_Wire):
    genus: str
    language: LanguageRef


class UrlRef(_Wire):
    url: str = Field(..., min_length=1)


class Variety(_Wire):
    is_default: bool = False
    pokemon: NamedResource


class SpeciesPayload(_Wire):
    name: str
    flavor_text_entries: list[FlavorTextEntry] = Field(default_factory=list)
    genera: list[GenusEntry] = Field(default_factory=list)
    evolution_chain: UrlRef | None = None
    varieties: list[Variety] = Field(default_factory=list)

    def to_domain(self) -> SpeciesDetail:
        # La variedad default primero; el resto conserva el orden del API.
        ordered = sorted(self.varieties, key=lambda v: not v.is_default)
        return SpeciesDetail(
            name=self.name,
            flavor_text_entries=tuple(
                LocalizedText(text=f.flavor_text, language=f.language.name)
                for f in self.flavor_text_entries
            ),
            genera=tuple(
                LocalizedText(text=g.genus, language=g.language.name) for g in self.genera
            ),
            lineage_locator=self.evolution_chain.url if self.evolution_chain else None,
            variety_locators=tuple(v.pokemon.url for v in ordered),
        )


class ChainLink(_Wire):
    species: NamedResource
    evolves_to: list["ChainLink"] = Field(default_factory=list)

    def to_domain(self) -> LineageNode:
        return LineageNode(
            species_name=self.species.name,
            species_locator=self.species.url,
            children=tuple(child.to_domain() for child in self.evolves_to),
        )


class EvolutionChainPayload(_Wire):
    id: int | None = None
    chain: ChainLink

    def to_domain(self) -> EvolutionLineage:
        return EvolutionLineage(id=self.id, root=self.chain.to_domain())
