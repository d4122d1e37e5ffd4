"""
Item repository - the record store adapter used by the item and translation services.
Challenge: Schemaless records on a relational table; partial updates must not clobber
unrelated attributes, and the key columns are never written after insert.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from item_store.core.errors import (
    ConflictError,
    NestedPathUnsupportedError,
    NotFoundError,
    StorageError,
)
from item_store.db.models.item import (
    CREATED_AT,
    KEY_FIELDS,
    TRANSLATIONS,
    UPDATED_AT,
    Item,
)
from item_store.db.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


def _apply_assignments(item: Item, assignments: Iterable[tuple[str, Any]]) -> None:
    """Route each wire-level field to its column; everything else lands in attributes."""
    attributes = dict(item.attributes or {})
    for field, value in assignments:
        if field in KEY_FIELDS or field == CREATED_AT:
            raise ValueError(f"{field} cannot be assigned on an existing item")
        if field == UPDATED_AT:
            item.updated_at = value
        elif field == TRANSLATIONS:
            item.translations = None if value is None else dict(value)
        else:
            attributes[field] = value
    # New dict object so the JSON column is flagged dirty
    item.attributes = attributes


class ItemRepository(BaseRepository[Item]):
    """Single-item get / conditional put / update. Each method is its own transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, Item)

    async def get(self, owner_id: str, item_id: str) -> Item | None:
        return await self.get_by_key(owner_id, item_id)

    async def put_new(self, item: Item) -> Item:
        """Insert only if the key is free; ConflictError otherwise."""
        try:
            async with self.transaction() as session:
                session.add(item)
                await session.flush()
        except StorageError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise ConflictError("Item already exists") from exc.__cause__
            raise
        return item

    async def update(
        self,
        owner_id: str,
        item_id: str,
        assignments: list[tuple[str, Any]],
        existence_required: bool = True,
    ) -> Item:
        """Apply field assignments to one item and return the new state."""
        async with self.transaction() as session:
            item = await self.lock_by_key(session, owner_id, item_id)
            if item is None:
                if existence_required:
                    raise NotFoundError("Item not found")
                stamp = dict(assignments).get(UPDATED_AT)
                if stamp is None:
                    raise ValueError("upsert requires an updatedAt assignment")
                item = Item(
                    owner_id=owner_id,
                    item_id=item_id,
                    attributes={},
                    translations={},
                    created_at=stamp,
                    updated_at=stamp,
                )
                session.add(item)
            _apply_assignments(item, assignments)
        return item

    async def update_nested_map_entry(
        self,
        owner_id: str,
        item_id: str,
        map_field: str,
        sub_key: str,
        value: Any,
        updated_at: str | None = None,
    ) -> Item:
        """Set map_field[sub_key] = value, leaving every other key of the map as stored.

        Raises NestedPathUnsupportedError when map_field is not an existing map on the item.
        """
        async with self.transaction() as session:
            item = await self.lock_by_key(session, owner_id, item_id)
            if item is None:
                raise NotFoundError("Item not found")
            if map_field == TRANSLATIONS:
                current = item.translations
            else:
                current = (item.attributes or {}).get(map_field)
            if not isinstance(current, dict):
                raise NestedPathUnsupportedError(
                    f"{map_field} is not a map on item {owner_id}/{item_id}"
                )
            assignments: list[tuple[str, Any]] = [(map_field, {**current, sub_key: value})]
            if updated_at is not None:
                assignments.append((UPDATED_AT, updated_at))
            _apply_assignments(item, assignments)
        return item

    async def replace_field(
        self,
        owner_id: str,
        item_id: str,
        field: str,
        value: Any,
        updated_at: str | None = None,
    ) -> Item:
        """Overwrite one whole attribute (blind write, last writer wins)."""
        assignments: list[tuple[str, Any]] = [(field, value)]
        if updated_at is not None:
            assignments.append((UPDATED_AT, updated_at))
        logger.debug("replace_field %s on %s/%s", field, owner_id, item_id)
        return await self.update(owner_id, item_id, assignments)
