"""
Translation endpoint tests - cache flags, error statuses, fallback tiers over HTTP.
"""

import pytest
from httpx import AsyncClient

from item_store.core.errors import (
    PayloadTooLargeError,
    RateLimitedError,
    ServiceUnavailableError,
    TranslationFailedError,
    UnsupportedLanguagePairError,
)
from item_store.main import app
from item_store.translation.translate_client import get_translator
from tests.fakes import FailingTranslator

LAPTOP = {
    "ownerId": "u1",
    "itemId": "i1",
    "name": "Gaming Laptop",
    "description": "High-performance gaming laptop",
}
URL = "/api/v1/items/u1/i1/translation"


@pytest.mark.asyncio
async def test_translate_then_served_from_cache(client: AsyncClient, translator):
    await client.post("/api/v1/items", json=LAPTOP)

    first = await client.get(URL, params={"language": "fr"})
    assert first.status_code == 200
    body = first.json()
    assert body["fromCache"] is False
    assert body["usedFallbackStorage"] is False
    assert body["cachingFailed"] is False
    assert body["cacheTier"] == "nested_merge"
    assert body["translatedText"]
    assert body["item"]["translations"]["fr"] == body["translatedText"]
    assert body["item"]["name"] == "Gaming Laptop"

    stored = (await client.get("/api/v1/items/u1/i1")).json()
    assert stored["translations"] == {"fr": body["translatedText"]}

    second = (await client.get(URL, params={"language": "fr"})).json()
    assert second["fromCache"] is True
    assert second["translatedText"] == body["translatedText"]
    assert second["cacheTier"] is None
    assert len(translator.calls) == 1


@pytest.mark.asyncio
async def test_default_language_returns_description(client: AsyncClient, translator):
    """No language parameter means "en", the source language: no translation is needed."""
    await client.post("/api/v1/items", json=LAPTOP)
    response = await client.get(URL)
    assert response.status_code == 200
    body = response.json()
    assert body["translatedText"] == LAPTOP["description"]
    assert body["fromCache"] is False
    assert body["cachingFailed"] is False
    assert body["cacheTier"] is None
    assert body["item"]["translations"] == {}
    assert translator.calls == []


@pytest.mark.asyncio
async def test_invalid_language_is_400(client: AsyncClient):
    await client.post("/api/v1/items", json=LAPTOP)
    response = await client.get(URL, params={"language": "french"})
    assert response.status_code == 400
    assert "Invalid language code" in response.json()["detail"]


@pytest.mark.asyncio
async def test_missing_item_is_404(client: AsyncClient):
    response = await client.get(URL, params={"language": "fr"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_item_without_description_is_400(client: AsyncClient):
    await client.post("/api/v1/items", json={"ownerId": "u1", "itemId": "i1", "name": "Bare"})
    response = await client.get(URL, params={"language": "fr"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Item has no description to translate"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code",
    [
        (UnsupportedLanguagePairError("Unsupported language pair for translation"), 400),
        (PayloadTooLargeError("Description text is too large to translate"), 400),
        (ServiceUnavailableError("Translation service is currently unavailable"), 503),
        (RateLimitedError("Too many requests to the translation service"), 429),
        (TranslationFailedError("Service error: boom"), 500),
    ],
)
async def test_translator_errors_map_to_status(client: AsyncClient, error, status_code):
    await client.post("/api/v1/items", json=LAPTOP)
    app.dependency_overrides[get_translator] = lambda: FailingTranslator(error)
    response = await client.get(URL, params={"language": "fr"})
    assert response.status_code == status_code
    assert response.json()["detail"] == error.message

    stored = (await client.get("/api/v1/items/u1/i1")).json()
    assert stored["translations"] == {}


@pytest.mark.asyncio
async def test_missing_translation_map_falls_back_to_map_replace(client: AsyncClient, translator):
    """With the map attribute removed, the nested write is rejected and the whole map is written."""
    await client.post("/api/v1/items", json=LAPTOP)
    await client.put("/api/v1/items/u1/i1", json={"translations": None})

    first = (await client.get(URL, params={"language": "de"})).json()
    assert first["fromCache"] is False
    assert first["cacheTier"] == "map_replace"
    assert first["usedFallbackStorage"] is False

    second = (await client.get(URL, params={"language": "de"})).json()
    assert second["fromCache"] is True
    assert second["translatedText"] == first["translatedText"]
    assert len(translator.calls) == 1


@pytest.mark.asyncio
async def test_update_replacing_translations_invalidates_cache(client: AsyncClient, translator):
    await client.post("/api/v1/items", json=LAPTOP)
    await client.get(URL, params={"language": "fr"})
    await client.put("/api/v1/items/u1/i1", json={"translations": {}})

    again = (await client.get(URL, params={"language": "fr"})).json()
    assert again["fromCache"] is False
    assert len(translator.calls) == 2
