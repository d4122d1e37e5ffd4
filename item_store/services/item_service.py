"""
Item service - create / read / partial update of records (SOLID: Single Responsibility).
Challenge: Keep controllers thin; timestamps and key rules live here, not in the API.
Design: Store and clock are injected; easy to test with fakes.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from item_store.core.clock import utc_now
from item_store.core.errors import InvalidRequestError, NotFoundError
from item_store.db.models.item import (
    CREATED_AT,
    ITEM_ID,
    OWNER_ID,
    TRANSLATIONS,
    UPDATED_AT,
    Item,
)
from item_store.services.ports import RecordStore
from item_store.services.update_compiler import check_numeric_fields, compile_update

logger = logging.getLogger(__name__)

# Never taken from a create body: assigned by the service or derived
_SERVICE_FIELDS = frozenset({OWNER_ID, ITEM_ID, CREATED_AT, UPDATED_AT, TRANSLATIONS})


def _require_key(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value:
        raise InvalidRequestError("Missing required fields: ownerId and itemId are required")
    return value


class ItemService:
    """Handles record use cases: create, get, update."""

    def __init__(self, store: RecordStore, clock: Callable[[], str] = utc_now):
        self.store = store
        self.clock = clock

    async def create(self, fields: Mapping[str, Any]) -> Item:
        """Create a record with fresh timestamps and an empty translation map."""
        if not isinstance(fields, Mapping):
            raise InvalidRequestError("Request body must be an object")
        owner_id = _require_key(fields, OWNER_ID)
        item_id = _require_key(fields, ITEM_ID)
        attributes = {k: v for k, v in fields.items() if k not in _SERVICE_FIELDS}
        check_numeric_fields(attributes)

        now = self.clock()
        item = Item(
            owner_id=owner_id,
            item_id=item_id,
            attributes=attributes,
            translations={},
            created_at=now,
            updated_at=now,
        )
        item = await self.store.put_new(item)
        logger.info("Created item %s/%s", owner_id, item_id)
        return item

    async def get(self, owner_id: str, item_id: str) -> Item:
        item = await self.store.get(owner_id, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return item

    async def update(self, owner_id: str, item_id: str, fields: Mapping[str, Any]) -> Item:
        """Partial update; key fields in the body are ignored."""
        compiled = compile_update(fields, now=self.clock())
        item = await self.store.update(
            owner_id, item_id, compiled.assignments, existence_required=True
        )
        logger.info(
            "Updated item %s/%s fields=%s",
            owner_id,
            item_id,
            sorted(compiled.touched),
        )
        return item
