"""
Test doubles: clock, translators and record stores with controllable failures.
"""

from datetime import datetime, timedelta, timezone

from item_store.core.errors import (
    ConflictError,
    NestedPathUnsupportedError,
    NotFoundError,
    StorageError,
)
from item_store.db.models.item import TRANSLATIONS, UPDATED_AT, Item
from item_store.db.repositories.item_repository import _apply_assignments
from item_store.translation.translate_client import DebugTranslator


class TickingClock:
    """Each call returns a stamp one second after the previous one."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        return self.current.isoformat(timespec="microseconds")


class CountingTranslator(DebugTranslator):
    """DebugTranslator that records every call."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls: list[tuple[str, str, str]] = []

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        self.calls.append((text, source_language, target_language))
        return await super().translate(text, source_language, target_language)


class FailingTranslator:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        raise self.exc


def _copy(item: Item) -> Item:
    return Item(
        owner_id=item.owner_id,
        item_id=item.item_id,
        attributes=dict(item.attributes or {}),
        translations=None if item.translations is None else dict(item.translations),
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class MemoryStore:
    """Dict-backed record store with the repository's semantics; returns copies."""

    def __init__(self):
        self.items: dict[tuple[str, str], Item] = {}

    def _existing(self, owner_id: str, item_id: str) -> Item:
        item = self.items.get((owner_id, item_id))
        if item is None:
            raise NotFoundError("Item not found")
        return item

    async def get(self, owner_id, item_id):
        item = self.items.get((owner_id, item_id))
        return _copy(item) if item is not None else None

    async def put_new(self, item):
        key = (item.owner_id, item.item_id)
        if key in self.items:
            raise ConflictError("Item already exists")
        self.items[key] = _copy(item)
        return item

    async def update(self, owner_id, item_id, assignments, existence_required=True):
        item = self._existing(owner_id, item_id)
        _apply_assignments(item, assignments)
        return _copy(item)

    async def update_nested_map_entry(self, owner_id, item_id, map_field, sub_key, value, updated_at=None):
        item = self._existing(owner_id, item_id)
        if map_field != TRANSLATIONS or not isinstance(item.translations, dict):
            raise NestedPathUnsupportedError(f"{map_field} is not a map")
        assignments = [(TRANSLATIONS, {**item.translations, sub_key: value})]
        if updated_at is not None:
            assignments.append((UPDATED_AT, updated_at))
        _apply_assignments(item, assignments)
        return _copy(item)

    async def replace_field(self, owner_id, item_id, field, value, updated_at=None):
        assignments = [(field, value)]
        if updated_at is not None:
            assignments.append((UPDATED_AT, updated_at))
        return await self.update(owner_id, item_id, assignments)


class FlakyStore:
    """Wraps a store; nested-entry writes and/or replace_field for chosen fields raise."""

    def __init__(self, inner, fail_nested=False, fail_replace=(), nested_error=None):
        self.inner = inner
        self.fail_nested = fail_nested
        # Field names whose replace_field raises; "*" fails every field
        self.fail_replace = set(fail_replace)
        self.nested_error = nested_error or NestedPathUnsupportedError("nested path unsupported")
        self.calls: list[str] = []

    async def get(self, owner_id, item_id):
        self.calls.append("get")
        return await self.inner.get(owner_id, item_id)

    async def put_new(self, item):
        return await self.inner.put_new(item)

    async def update(self, owner_id, item_id, assignments, existence_required=True):
        self.calls.append("update")
        return await self.inner.update(owner_id, item_id, assignments, existence_required)

    async def update_nested_map_entry(self, owner_id, item_id, map_field, sub_key, value, updated_at=None):
        self.calls.append("update_nested_map_entry")
        if self.fail_nested:
            raise self.nested_error
        return await self.inner.update_nested_map_entry(
            owner_id, item_id, map_field, sub_key, value, updated_at=updated_at
        )

    async def replace_field(self, owner_id, item_id, field, value, updated_at=None):
        self.calls.append(f"replace_field:{field}")
        if "*" in self.fail_replace or field in self.fail_replace:
            raise StorageError(f"simulated failure writing {field}")
        return await self.inner.replace_field(owner_id, item_id, field, value, updated_at=updated_at)


