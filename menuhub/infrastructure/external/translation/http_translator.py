"""Machine translation over public HTTP APIs.

LibreTranslate is tried first; MyMemory is the fallback. Both are free
endpoints with no key, so failures are expected and surface as
TranslationFailed rather than as transport errors.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from menuhub.domain.exceptions import TranslationFailed

logger = logging.getLogger(__name__)

# Menu language code -> provider language code
LANGUAGE_MAP: dict[str, str] = {
    "sq": "sq",
    "it": "it",
    "de": "de",
    "fr": "fr",
    "zh": "zh",
    "en": "en",
}

_FALLBACK_SOURCE = "en"


class HttpTranslator:
    """Translator backed by LibreTranslate with MyMemory fallback."""

    def __init__(
        self,
        primary_url: str,
        fallback_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self.primary_url = primary_url
        self.fallback_url = fallback_url
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if this translator created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _libretranslate(self, text: str, source: str, target: str) -> str:
        resp = await self._http.post(
            self.primary_url,
            json={"q": text, "source": source, "target": target, "format": "text"},
        )
        resp.raise_for_status()
        return _require_text(_json_object(resp).get("translatedText"))

    async def _mymemory(self, text: str, source: str, target: str) -> str:
        resp = await self._http.get(
            self.fallback_url,
            params={"q": text, "langpair": f"{source}|{target}"},
        )
        resp.raise_for_status()
        data = _json_object(resp).get("responseData")
        if not isinstance(data, dict):
            raise ValueError("Provider returned no responseData")
        return _require_text(data.get("translatedText"))

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate text; same source and target returns text unchanged.

        Raises:
            TranslationFailed: Unsupported target language, or both providers failed.
        """
        if source_lang == target_lang:
            return text
        target = LANGUAGE_MAP.get(target_lang)
        if target is None:
            raise TranslationFailed(target_lang, f"Unsupported target language: {target_lang}")
        source = LANGUAGE_MAP.get(source_lang, _FALLBACK_SOURCE)

        try:
            return await self._libretranslate(text, source, target)
        except (httpx.HTTPError, ValueError) as primary_error:
            logger.info(
                "LibreTranslate failed (%s), trying MyMemory", type(primary_error).__name__
            )
            try:
                return await self._mymemory(text, source, target)
            except (httpx.HTTPError, ValueError) as fallback_error:
                logger.warning(
                    "Both translation providers failed for %s->%s: %s / %s",
                    source,
                    target,
                    type(primary_error).__name__,
                    type(fallback_error).__name__,
                )
                raise TranslationFailed(
                    target_lang, "Translation service temporarily unavailable"
                ) from fallback_error


def _require_text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Provider returned no translated text")
    return value


def _json_object(resp: httpx.Response) -> dict[str, Any]:
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError("Provider returned a non-object body")
    return data
