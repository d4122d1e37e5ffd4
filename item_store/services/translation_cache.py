"""
Translation cache - serve an item's description in a target language, memoized on the item.
Challenge: The store only offers single-item writes, and setting one nested map key is not
always possible (e.g. the map attribute is missing), so persistence degrades through tiers.
Design: Tiers are an ordered tuple of write strategies tried in turn; a translation that
could not be cached is still returned, flagged, rather than failing the request.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from item_store.core.clock import utc_now
from item_store.core.errors import (
    InvalidRequestError,
    NotFoundError,
    StorageError,
    TranslationFailedError,
)
from item_store.core.languages import is_valid_language_code
from item_store.db.models.item import TRANSLATIONS, Item
from item_store.metrics import CACHE_LOOKUPS, CACHE_WRITES
from item_store.services.ports import RecordStore, Translator

logger = logging.getLogger(__name__)


class CacheTier(str, Enum):
    NESTED_MERGE = "nested_merge"
    MAP_REPLACE = "map_replace"
    FLAT_ATTRIBUTE = "flat_attribute"


@dataclass(frozen=True)
class CacheWrite:
    owner_id: str
    item_id: str
    language: str
    text: str
    updated_at: str
    fallback_prefix: str

    @property
    def flat_attribute(self) -> str:
        return self.fallback_prefix + self.language


async def write_nested_entry(store: RecordStore, write: CacheWrite) -> Item:
    """Tier A: set translations[language] only. Concurrent writes of other languages survive."""
    return await store.update_nested_map_entry(
        write.owner_id,
        write.item_id,
        TRANSLATIONS,
        write.language,
        write.text,
        updated_at=write.updated_at,
    )


async def write_whole_map(store: RecordStore, write: CacheWrite) -> Item:
    """Tier B: re-read, merge in memory, write the map back.

    Not atomic: another language written between the read and the write is lost.
    """
    current = await store.get(write.owner_id, write.item_id)
    if current is None:
        raise NotFoundError("Item not found")
    merged = {**(current.translations or {}), write.language: write.text}
    return await store.replace_field(
        write.owner_id, write.item_id, TRANSLATIONS, merged, updated_at=write.updated_at
    )


async def write_flat_attribute(store: RecordStore, write: CacheWrite) -> Item:
    """Tier C: top-level attribute prefix + language, bypassing the map."""
    return await store.replace_field(
        write.owner_id,
        write.item_id,
        write.flat_attribute,
        write.text,
        updated_at=write.updated_at,
    )


@dataclass(frozen=True)
class WriteStrategy:
    tier: CacheTier
    write: Callable[[RecordStore, CacheWrite], Awaitable[Item]]
    uses_fallback_storage: bool = False


DEFAULT_WRITE_STRATEGIES: tuple[WriteStrategy, ...] = (
    WriteStrategy(CacheTier.NESTED_MERGE, write_nested_entry),
    WriteStrategy(CacheTier.MAP_REPLACE, write_whole_map),
    WriteStrategy(CacheTier.FLAT_ATTRIBUTE, write_flat_attribute, uses_fallback_storage=True),
)


@dataclass
class TranslationResult:
    item: dict[str, Any]
    translated_text: str
    from_cache: bool
    used_fallback_storage: bool
    cache_tier: CacheTier | None = None
    caching_failed: bool = False


class TranslationCacheService:
    """Lookup → translate → persist. Store and translator are injected."""

    def __init__(
        self,
        store: RecordStore,
        translator: Translator,
        source_language: str = "en",
        fallback_prefix: str = "translation_",
        strategies: tuple[WriteStrategy, ...] = DEFAULT_WRITE_STRATEGIES,
        clock: Callable[[], str] = utc_now,
    ):
        self.store = store
        self.translator = translator
        self.source_language = source_language
        self.fallback_prefix = fallback_prefix
        self.strategies = strategies
        self.clock = clock

    def lookup(self, item: Item, language: str) -> tuple[str, bool] | None:
        """Cached text and whether it came from the flat fallback attribute, or None."""
        cached = (item.translations or {}).get(language)
        if cached is not None:
            return cached, False
        flat = (item.attributes or {}).get(self.fallback_prefix + language)
        if isinstance(flat, str) and flat:
            return flat, True
        return None

    async def get_translation(self, owner_id: str, item_id: str, language: str) -> TranslationResult:
        if not is_valid_language_code(language):
            raise InvalidRequestError('Invalid language code. Please use format "en" or "en-US"')

        item = await self.store.get(owner_id, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        description = item.description
        if not description:
            raise InvalidRequestError("Item has no description to translate")
        if not isinstance(description, str):
            raise InvalidRequestError("Item description must be text")

        if language == self.source_language:
            CACHE_LOOKUPS.labels(result="source").inc()
            logger.debug("Source language requested for %s/%s, returning description", owner_id, item_id)
            return TranslationResult(
                item=item.to_view(),
                translated_text=description,
                from_cache=False,
                used_fallback_storage=False,
            )

        hit = self.lookup(item, language)
        if hit is not None:
            text, from_flat = hit
            CACHE_LOOKUPS.labels(result="fallback_hit" if from_flat else "hit").inc()
            logger.debug("Cache hit %s/%s lang=%s flat=%s", owner_id, item_id, language, from_flat)
            return TranslationResult(
                item=item.to_view(),
                translated_text=text,
                from_cache=True,
                used_fallback_storage=from_flat,
            )

        CACHE_LOOKUPS.labels(result="miss").inc()
        text = await self._translate(description, language)
        return await self._persist(item, language, text)

    async def _translate(self, description: str, language: str) -> str:
        try:
            text = await self.translator.translate(description, self.source_language, language)
        except TranslationFailedError:
            raise
        except Exception as exc:
            raise TranslationFailedError(f"Service error: {exc}") from exc
        if not isinstance(text, str) or not text:
            raise TranslationFailedError("Translation service returned no text")
        return text

    async def _persist(self, item: Item, language: str, text: str) -> TranslationResult:
        write = CacheWrite(
            owner_id=item.owner_id,
            item_id=item.item_id,
            language=language,
            text=text,
            updated_at=self.clock(),
            fallback_prefix=self.fallback_prefix,
        )
        for strategy in self.strategies:
            try:
                stored = await strategy.write(self.store, write)
            except StorageError as exc:
                logger.warning(
                    "Cache write %s failed for %s/%s lang=%s: %s",
                    strategy.tier.value,
                    write.owner_id,
                    write.item_id,
                    language,
                    exc,
                )
                continue
            CACHE_WRITES.labels(tier=strategy.tier.value).inc()
            return TranslationResult(
                item=stored.to_view(),
                translated_text=text,
                from_cache=False,
                used_fallback_storage=strategy.uses_fallback_storage,
                cache_tier=strategy.tier,
            )

        CACHE_WRITES.labels(tier="failed").inc()
        logger.error(
            "Translation for %s/%s lang=%s not cached: every write tier failed",
            write.owner_id,
            write.item_id,
            language,
        )
        view = item.to_view()
        view[TRANSLATIONS] = {**view.get(TRANSLATIONS, {}), language: text}
        return TranslationResult(
            item=view,
            translated_text=text,
            from_cache=False,
            used_fallback_storage=False,
            caching_failed=True,
        )
