"""Entity detail & lineage resolver.

`load(entity_id)` runs a strictly sequential chain where each stage consumes
the locator embedded in the previous response:

    entity (by id) -> species (entity.species_locator)
                   -> evolution chain (species.lineage_locator)

The evolution tree is then flattened (`flatten_lineage`) and every entry's
artwork is resolved concurrently. The view is committed all-or-nothing: a
failure at any stage, image lookups included, yields an ERROR view with no
partial data.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import AppSettings
from core.domain.errors import FETCH_FAILED_MESSAGE, FetchFailed
from core.domain.models import (
    EntityDetail,
    EntityDetailView,
    EntitySummary,
    EvolutionLineage,
    LineageEntry,
    LoadState,
    SpeciesDetail,
)
from core.interfaces.catalog import CatalogSource
from core.services.lookups import RequestToken, ViewHooks, gather_or_fail, resolve_summary

logger = logging.getLogger(__name__)

DEFAULT_LINEAGE_DEPTH = 2


def flatten_lineage(
    lineage: EvolutionLineage,
    *,
    max_depth: int | None = DEFAULT_LINEAGE_DEPTH,
) -> tuple[LineageEntry, ...]:
    """Flatten the evolution tree level by level.

    Order: the root, then its children in document order, then each child's
    own children in document order, and so on. `max_depth` counts nesting
    levels below the root (2 covers three-stage lines); `None` walks the
    whole tree.
    """

    entries: list[LineageEntry] = []
    level = [lineage.root]
    depth = 0
    while level:
        entries.extend(
            LineageEntry(species_name=node.species_name, species_locator=node.species_locator)
            for node in level
        )
        if max_depth is not None and depth >= max_depth:
            break
        level = [child for node in level for child in node.children]
        depth += 1
    return tuple(entries)


class EntityDetailResolver:
    """Builds the detail view for one entity id."""

    def __init__(
        self,
        catalog: CatalogSource,
        *,
        settings: AppSettings | None = None,
        hooks: ViewHooks[EntityDetailView] | None = None,
    ) -> None:
        self._catalog = catalog
        self._settings = settings or AppSettings()
        self._hooks = hooks or ViewHooks()
        self._token = RequestToken()
        self._view = EntityDetailView(language=self._settings.default_language)

    @property
    def view(self) -> EntityDetailView:
        return self._view

    def _commit(self, view: EntityDetailView) -> EntityDetailView:
        self._view = view
        if self._hooks.on_change:
            self._hooks.on_change(view)
        return view

    async def load(self, entity_id: int) -> EntityDetailView:
        token = self._token.advance()
        language = self._settings.default_language
        self._commit(
            EntityDetailView(entity_id=entity_id, state=LoadState.LOADING, language=language)
        )

        try:
            detail, species, lineage = await asyncio.wait_for(
                self._resolve(entity_id),
                timeout=self._settings.load_timeout_seconds,
            )
        except asyncio.TimeoutError:
            exc = FetchFailed("detail", None, f"timed out after {self._settings.load_timeout_seconds}s")
            return self._fail(token, entity_id, exc)
        except FetchFailed as exc:
            return self._fail(token, entity_id, exc)

        if not self._token.is_current(token):
            logger.debug("discarding stale detail for entity %s", entity_id)
            return self._view

        return self._commit(
            EntityDetailView(
                entity_id=entity_id,
                detail=detail,
                species=species,
                lineage=lineage,
                state=LoadState.READY,
                language=language,
            )
        )

    async def _resolve(
        self, entity_id: int
    ) -> tuple[EntityDetail, SpeciesDetail, tuple[LineageEntry, ...]]:
        detail = await self._catalog.fetch_entity_by_id(entity_id)
        species = await self._catalog.fetch_species(detail.species_locator)

        if species.lineage_locator is None:
            # Sin cadena publicada: linaje de una sola etapa.
            entries: tuple[LineageEntry, ...] = (
                LineageEntry(species_name=species.name, species_locator=detail.species_locator),
            )
        else:
            lineage = await self._catalog.fetch_lineage(species.lineage_locator)
            entries = flatten_lineage(lineage, max_depth=self._settings.lineage_max_depth)

        return detail, species, await self.resolve_images(entries, known=detail)

    async def resolve_images(
        self,
        entries: tuple[LineageEntry, ...],
        *,
        known: EntityDetail | None = None,
    ) -> tuple[LineageEntry, ...]:
        """Resolve artwork for each entry; `known` seeds its own species if it is the default form."""

        async def lookup(entry: LineageEntry) -> EntitySummary:
            if (
                known is not None
                and known.is_default
                and entry.species_locator == known.species_locator
            ):
                return known.summary()
            return await resolve_summary(self._catalog, entry.species_locator)

        summaries = await gather_or_fail(
            lookup,
            entries,
            max_concurrency=self._settings.max_concurrency,
        )
        return tuple(
            entry.model_copy(update={"image_url": summary.image_url})
            for entry, summary in zip(entries, summaries)
        )

    def _fail(self, token: int, entity_id: int, exc: FetchFailed) -> EntityDetailView:
        if not self._token.is_current(token):
            logger.debug("discarding stale failure for entity %s: %s", entity_id, exc)
            return self._view
        logger.warning("entity %s failed: %s", entity_id, exc)
        return self._commit(
            EntityDetailView(
                entity_id=entity_id,
                state=LoadState.ERROR,
                error=FETCH_FAILED_MESSAGE,
                language=self._settings.default_language,
            )
        )
