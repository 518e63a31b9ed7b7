"""
Google Cloud Translation (v2) client.

Sends up to 128 phrases per request and returns the translations in the
order they were sent.
"""

from typing import List, Optional, Sequence

import requests

from .console import log_debug
from .errors import DecodeError, RequestError

GOOGLE_TRANSLATE_API_URL = 'https://translation.googleapis.com/language/translate/v2'
DEFAULT_TIMEOUT = 60


class GoogleTranslateClient:
    """Thin wrapper around the Translation API v2 ``translate`` method."""

    def __init__(
        self,
        api_key: str,
        api_url: str = GOOGLE_TRANSLATE_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        text_format: str = 'text',
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.text_format = text_format

    def translate_batch(
        self,
        phrases: Sequence[str],
        target_lang: str,
        source_lang: Optional[str] = None,
    ) -> List[str]:
        """Translate ``phrases`` into ``target_lang``, preserving order."""
        phrases = list(phrases)
        if not phrases:
            return []

        form = {
            'q': phrases,
            'target': target_lang,
            'format': self.text_format,
        }
        if source_lang:
            form['source'] = source_lang

        log_debug(f"POST {self.api_url} ({len(phrases)} phrases -> {target_lang})")
        try:
            response = requests.post(
                self.api_url,
                params={'key': self.api_key},
                data=form,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise RequestError(f"Translation API error: {_describe_http_error(e)}", phrases) from e
        except requests.exceptions.RequestException as e:
            raise RequestError(f"Error calling Translation API: {e}", phrases) from e

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"Translation API returned invalid JSON: {e}", phrases) from e

        translations = parse_translations(data, phrases)
        return translations

    def translate_phrase(self, text: str, target_lang: str, source_lang: Optional[str] = None) -> str:
        """Translate a single phrase."""
        return self.translate_batch([text], target_lang, source_lang)[0]


def parse_translations(data, phrases: Sequence[str]) -> List[str]:
    """Extract ``data.translations[].translatedText`` from a response body."""
    try:
        items = data['data']['translations']
        translations = [item['translatedText'] for item in items]
    except (KeyError, TypeError) as e:
        raise DecodeError(f"Unexpected Translation API response: missing {e}", phrases) from e

    if not all(isinstance(text, str) for text in translations):
        raise DecodeError("Unexpected Translation API response: non-string translation", phrases)
    if len(translations) != len(phrases):
        raise DecodeError(
            f"Translation API returned {len(translations)} translations for {len(phrases)} phrases",
            phrases,
        )
    return translations


def _describe_http_error(error: requests.exceptions.HTTPError) -> str:
    response = error.response
    if response is None:
        return str(error)
    message = ''
    try:
        message = response.json().get('error', {}).get('message', '')
    except (ValueError, AttributeError):
        pass
    status = f"{response.status_code}"
    return f"{status} {message}".strip() if message else status
