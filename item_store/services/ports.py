"""
Collaborator interfaces the services depend on (SOLID: Dependency Inversion).
ItemRepository and the translator clients satisfy these structurally; tests pass fakes.
"""

from typing import Any, Protocol

from item_store.db.models.item import Item


class RecordStore(Protocol):
    async def get(self, owner_id: str, item_id: str) -> Item | None: ...

    async def put_new(self, item: Item) -> Item: ...

    async def update(
        self,
        owner_id: str,
        item_id: str,
        assignments: list[tuple[str, Any]],
        existence_required: bool = True,
    ) -> Item: ...

    async def update_nested_map_entry(
        self,
        owner_id: str,
        item_id: str,
        map_field: str,
        sub_key: str,
        value: Any,
        updated_at: str | None = None,
    ) -> Item: ...

    async def replace_field(
        self,
        owner_id: str,
        item_id: str,
        field: str,
        value: Any,
        updated_at: str | None = None,
    ) -> Item: ...


class Translator(Protocol):
    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        """Return the translated text or raise a TranslationFailedError subclass."""
        ...
