"""
Item model - schemaless record keyed by (owner_id, item_id).
Free-form fields live in one JSON column; translations is its own JSON map so it can be
absent (NULL) independently of the other attributes.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from item_store.db.base import Base

# Wire names of the fields stored in dedicated columns
OWNER_ID = "ownerId"
ITEM_ID = "itemId"
CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"
TRANSLATIONS = "translations"
DESCRIPTION = "description"

KEY_FIELDS = frozenset({OWNER_ID, ITEM_ID})


class Item(Base):
    """Item entity. One row per record; the composite primary key is never updated."""

    __tablename__ = "items"

    owner_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    item_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    translations: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    # ISO-8601 UTC, fixed width, so string order is time order
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    @property
    def description(self) -> Any:
        return (self.attributes or {}).get(DESCRIPTION)

    def to_view(self) -> dict[str, Any]:
        """Flatten into the JSON shape callers see."""
        view: dict[str, Any] = {OWNER_ID: self.owner_id, ITEM_ID: self.item_id}
        view.update(self.attributes or {})
        if self.translations is not None:
            view[TRANSLATIONS] = dict(self.translations)
        view[CREATED_AT] = self.created_at
        view[UPDATED_AT] = self.updated_at
        return view

    def __repr__(self) -> str:
        return f"<Item(owner_id={self.owner_id}, item_id={self.item_id})>"
