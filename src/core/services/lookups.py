"""Shared lookup helpers for the browser and the lineage resolver.

Both services need the same three building blocks:

- `gather_or_fail`: concurrent fan-out that completes with every result or
  with the first failure (remaining lookups are cancelled).
- `resolve_summary`: the species locator -> default variety -> entity chain
  used for page cards and for lineage artwork.
- `RequestToken`: the monotonic token compared at completion time so that
  results for an abandoned page or entity are dropped.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, TypeVar

from core.domain.errors import FetchFailed
from core.domain.models import EntitySummary
from core.interfaces.catalog import CatalogSource

T = TypeVar("T")
R = TypeVar("R")
V = TypeVar("V")


async def gather_or_fail(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    *,
    max_concurrency: int | None = None,
) -> list[R]:
    """Run `func` over `items` concurrently, preserving input order.

    The first exception propagates and every sibling still in flight is
    cancelled before returning.
    """

    sem = asyncio.Semaphore(max(1, max_concurrency)) if max_concurrency else None

    async def run_one(item: T) -> R:
        if sem is None:
            return await func(item)
        async with sem:
            return await func(item)

    tasks = [asyncio.ensure_future(run_one(item)) for item in items]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def resolve_summary(catalog: CatalogSource, species_locator: str) -> EntitySummary:
    """Follow species -> default variety -> entity and project it to a summary."""

    species = await catalog.fetch_species(species_locator)
    variety = species.default_variety_locator
    if variety is None:
        raise FetchFailed("variety", species_locator, "species has no varieties")
    entity = await catalog.fetch_entity(variety)
    return entity.summary()


class RequestToken:
    """Monotonic request counter; only the latest issued token is current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self.current = 0

    def advance(self) -> int:
        self.current = next(self._counter)
        return self.current

    def is_current(self, token: int) -> bool:
        return token == self.current


@dataclass
class ViewHooks(Generic[V]):
    """Optional callbacks for presentation layers."""

    on_change: Callable[[V], None] | None = None
    navigate: Callable[[int], None] | None = None
