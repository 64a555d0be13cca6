"""Windowed catalog browser.

Turns a page number into a fixed-size window of `EntitySummary` cards:

1. fetch the full index to learn the collection size,
2. slice `[(page - 1) * size, page * size)`,
3. resolve every entry (species -> variety -> entity) concurrently.

Navigation (`previous`, `next`, `jump_to`) is clamped to the real number of
pages, notifies the navigation hook and re-fetches the whole window. Each
load captures a request token; a completion whose token is no longer current
is discarded without touching the view.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import AppSettings
from core.domain.errors import FetchFailed, ValidationFailed
from core.domain.models import (
    CatalogPageView,
    CollectionPage,
    EntitySummary,
    LoadState,
)
from core.interfaces.catalog import CatalogSource
from core.services.lookups import RequestToken, ViewHooks, gather_or_fail, resolve_summary

logger = logging.getLogger(__name__)


def page_range_message(total_pages: int) -> str:
    return f"Please enter a valid page number between 1 and {total_pages}"


def parse_page_input(raw: str | int, total_pages: int) -> int:
    """Validate a user-entered page number against `[1, total_pages]`."""

    if isinstance(raw, bool):
        raise ValidationFailed(page_range_message(total_pages))
    if isinstance(raw, int):
        page = raw
    else:
        try:
            page = int(str(raw).strip())
        except ValueError:
            raise ValidationFailed(page_range_message(total_pages)) from None
    if page < 1 or page > total_pages:
        raise ValidationFailed(page_range_message(total_pages))
    return page


class CatalogBrowser:
    """Paginated view over the remote collection."""

    def __init__(
        self,
        catalog: CatalogSource,
        *,
        settings: AppSettings | None = None,
        hooks: ViewHooks[CatalogPageView] | None = None,
        initial_page: int = 1,
    ) -> None:
        self._catalog = catalog
        self._settings = settings or AppSettings()
        self._hooks = hooks or ViewHooks()
        self._page_size = self._settings.page_size
        self._token = RequestToken()
        self._view = CatalogPageView(page_index=max(1, initial_page))

    @property
    def view(self) -> CatalogPageView:
        return self._view

    @property
    def page_index(self) -> int:
        return self._view.page_index

    @property
    def total_pages(self) -> int:
        return self._view.total_pages

    def _commit(self, view: CatalogPageView) -> CatalogPageView:
        self._view = view
        if self._hooks.on_change:
            self._hooks.on_change(view)
        return view

    async def load(self, page_index: int | None = None) -> CatalogPageView:
        target = self._view.page_index if page_index is None else page_index
        if target < 1:
            raise ValidationFailed(page_range_message(self._view.total_pages))

        token = self._token.advance()
        self._commit(
            CatalogPageView(
                page_index=target,
                total_pages=self._view.total_pages,
                state=LoadState.LOADING,
            )
        )

        try:
            total_pages, items = await asyncio.wait_for(
                self._fetch_window(target),
                timeout=self._settings.load_timeout_seconds,
            )
        except asyncio.TimeoutError:
            exc = FetchFailed("page", None, f"timed out after {self._settings.load_timeout_seconds}s")
            return self._fail(token, target, exc)
        except FetchFailed as exc:
            return self._fail(token, target, exc)

        if not self._token.is_current(token):
            logger.debug("discarding stale result for page %s", target)
            return self._view

        if items is None:
            message = page_range_message(total_pages)
            logger.info("page %s is out of range (1..%s)", target, total_pages)
            # El índice queda acotado a la última página conocida.
            return self._commit(
                CatalogPageView(
                    page_index=max(total_pages, 1),
                    total_pages=total_pages,
                    state=LoadState.ERROR,
                    error=message,
                    validation_error=message,
                )
            )

        return self._commit(
            CatalogPageView(
                items=items,
                page_index=target,
                total_pages=total_pages,
                state=LoadState.READY,
            )
        )

    async def _fetch_window(self, page_index: int) -> tuple[int, tuple[EntitySummary, ...] | None]:
        index = await self._catalog.fetch_index()
        page = CollectionPage(
            page_index=page_index,
            page_size=self._page_size,
            total_count=index.total_count,
        )
        if not page.in_range:
            return page.total_pages, None

        summaries = await gather_or_fail(
            lambda entry: resolve_summary(self._catalog, entry.species_locator),
            index.entries[page.offset : page.stop],
            max_concurrency=self._settings.max_concurrency,
        )
        return page.total_pages, tuple(summaries)

    def _fail(self, token: int, target: int, exc: FetchFailed) -> CatalogPageView:
        if not self._token.is_current(token):
            logger.debug("discarding stale failure for page %s: %s", target, exc)
            return self._view
        logger.warning("page %s failed: %s", target, exc)
        return self._commit(
            CatalogPageView(
                page_index=target,
                total_pages=self._view.total_pages,
                state=LoadState.ERROR,
                error=exc.user_message,
            )
        )

    async def _navigate(self, target: int) -> CatalogPageView:
        if self._hooks.navigate:
            self._hooks.navigate(target)
        return await self.load(target)

    async def previous(self) -> CatalogPageView:
        target = self.page_index - 1
        if self.total_pages > 0:
            target = min(target, self.total_pages)
        target = max(target, 1)
        if target == self.page_index:
            return self._view
        return await self._navigate(target)

    async def next(self) -> CatalogPageView:
        if self.total_pages == 0:
            return self._view
        target = min(self.page_index + 1, self.total_pages)
        if target == self.page_index:
            return self._view
        return await self._navigate(target)

    def validate_jump(self, raw: str | int) -> int:
        """Synchronous half of `jump_to`; records the message on rejection."""

        try:
            return parse_page_input(raw, self.total_pages)
        except ValidationFailed as exc:
            self._commit(self._view.model_copy(update={"validation_error": exc.message}))
            raise

    async def jump_to(self, raw: str | int) -> CatalogPageView:
        target = self.validate_jump(raw)
        return await self._navigate(target)
