"""Item request/response schemas - REST API contract (camelCase on the wire)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemCreate(CamelModel):
    """Keys are required; any other field is stored as-is (schemaless record)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    owner_id: str = Field(..., min_length=1, max_length=128)
    item_id: str = Field(..., min_length=1, max_length=128)

    def as_record_fields(self) -> dict[str, Any]:
        """Wire-level mapping handed to the service (extras keep their original names)."""
        return self.model_dump(by_alias=True)


class ItemResponse(CamelModel):
    """Record view: keys, free attributes (as extras), translations, timestamps."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    owner_id: str
    item_id: str
    translations: dict[str, str] | None = None
    created_at: str
    updated_at: str


class TranslationResponse(CamelModel):
    item: ItemResponse
    translated_text: str
    from_cache: bool
    used_fallback_storage: bool
    caching_failed: bool = False
    cache_tier: str | None = None
