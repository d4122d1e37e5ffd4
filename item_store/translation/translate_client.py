"""
Translation backends - the external Translate(text, source, target) collaborator.
Challenge: Map each backend's failures onto the service's typed translation errors.
Design: Both clients satisfy services.ports.Translator; get_translator() picks one from settings.
"""

import logging
from functools import lru_cache

import httpx

from item_store.config import get_settings
from item_store.core.errors import (
    PayloadTooLargeError,
    RateLimitedError,
    ServiceUnavailableError,
    TranslationFailedError,
    UnsupportedLanguagePairError,
)
from item_store.services.ports import Translator

logger = logging.getLogger(__name__)


class DebugTranslator:
    """Offline, deterministic translator: "[fr] text". Used in development and tests."""

    def __init__(self, max_text_bytes: int = 10000, unsupported_targets: frozenset[str] = frozenset()):
        self.max_text_bytes = max_text_bytes
        self.unsupported_targets = unsupported_targets

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        if target_language in self.unsupported_targets or target_language == source_language:
            raise UnsupportedLanguagePairError("Unsupported language pair for translation")
        if len(text.encode("utf-8")) > self.max_text_bytes:
            raise PayloadTooLargeError("Description text is too large to translate")
        return f"[{target_language}] {text}"


class LibreTranslateClient:
    """LibreTranslate HTTP API (POST /translate)."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        payload = {"q": text, "source": source_language, "target": target_language, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key
        try:
            async with self._client() as client:
                r = await client.post("/translate", json=payload)
        except httpx.TimeoutException as exc:
            raise ServiceUnavailableError("Translation service timed out") from exc
        except httpx.TransportError as exc:
            raise ServiceUnavailableError("Translation service is currently unavailable") from exc

        if r.status_code == 200:
            translated = r.json().get("translatedText")
            if not translated:
                raise TranslationFailedError("Translation service returned no text")
            return translated
        raise self._error_for(r)

    @staticmethod
    def _error_for(r: httpx.Response) -> TranslationFailedError:
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("error", ""))
        else:
            message = r.text[:200]
        logger.warning("LibreTranslate returned %s: %s", r.status_code, message)
        if r.status_code == 400 and "not supported" in message.lower():
            return UnsupportedLanguagePairError("Unsupported language pair for translation")
        if r.status_code == 413:
            return PayloadTooLargeError("Description text is too large to translate")
        if r.status_code == 429:
            return RateLimitedError("Too many requests to the translation service")
        if r.status_code in (502, 503, 504):
            return ServiceUnavailableError("Translation service is currently unavailable")
        return TranslationFailedError(f"Service error: {message or r.status_code}")


@lru_cache
def get_translator() -> Translator:
    """Configured backend. FastAPI dependency; overridden in tests."""
    settings = get_settings()
    if settings.translator_backend == "libretranslate":
        return LibreTranslateClient(
            settings.translator_url,
            api_key=settings.translator_api_key,
            timeout=settings.translator_timeout_seconds,
        )
    return DebugTranslator(max_text_bytes=settings.translator_max_text_bytes)
