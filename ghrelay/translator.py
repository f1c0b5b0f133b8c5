"""DeepL translation of notification text fragments.

Translation is optional. Without an API key, or for empty text, no request is
made. Backend errors are logged and reported as unavailable; callers never see
an exception.
"""

import logging

import requests

from ghrelay.config import DeepLConfig
from ghrelay.models import TranslationResult

LOG = logging.getLogger("ghrelay.translator")


class TranslationError(Exception):
    """Raised internally when the DeepL API call fails or returns garbage."""

    pass


class DeepLTranslator:
    """Translates one text fragment per call via DeepL ``/v2/translate``."""

    def __init__(self, config: DeepLConfig) -> None:
        self._config = config
        self._session = requests.Session()
        if config.api_key:
            self._session.headers["Authorization"] = f"DeepL-Auth-Key {config.api_key}"

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def translate(self, text: str | None) -> TranslationResult:
        if not self.enabled or not text or not text.strip():
            return TranslationResult.unavailable()
        try:
            translated = self._request(text)
        except TranslationError as e:
            LOG.error("Translation failed: %s", e)
            return TranslationResult.unavailable()
        return TranslationResult(text=translated)

    def _request(self, text: str) -> str:
        url = f"{self._config.resolved_api_url}/v2/translate"
        try:
            resp = self._session.post(
                url,
                data={"text": text, "target_lang": self._config.target_lang},
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            raise TranslationError(str(e)) from e
        if resp.status_code >= 400:
            raise TranslationError(f"{resp.status_code}: {resp.text or resp.reason}")
        try:
            translations = resp.json()["translations"]
            translated = translations[0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected response: {e!r}") from e
        if not translated:
            raise TranslationError("Empty translation")
        return translated
