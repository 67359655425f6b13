#!/usr/bin/env python3
"""
HTTP client for the Shipi18n translation service.

The service takes a JSON document as text plus a JSON-encoded list of target
languages and returns one JSON string (or object) per language, mixed with a
few metadata entries. TranslationResult keeps the two apart.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from .errors import APIError, ConfigError, MissingAPIKeyError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://x9527l3blg.execute-api.us-east-1.amazonaws.com"
DEFAULT_TIMEOUT = 120

# Response keys that are metadata, not languages
METADATA_KEYS = {
    "warnings": "warnings",
    "skipped": "skipped",
    "contextEnhanced": "context_enhanced",
    "namespaceInfo": "namespace_info",
    "fallbackInfo": "fallback_info",
}


@dataclass
class TranslationResult:
    """Per-language documents and response metadata, kept separate."""
    languages: dict[str, dict] = field(default_factory=dict)
    warnings: list = field(default_factory=list)
    skipped: Optional[dict] = None
    context_enhanced: Any = None
    namespace_info: Any = None
    fallback_info: Any = None

    @classmethod
    def from_response(cls, data: dict) -> "TranslationResult":
        """
        Split a raw service response into languages and metadata.

        Language values that are JSON strings are parsed. A value that does
        not yield an object is dropped and reported in warnings, so the
        language is treated as missing downstream.
        """
        result = cls()
        invalid = []
        for key, value in data.items():
            if key in METADATA_KEYS:
                setattr(result, METADATA_KEYS[key], value)
                continue

            document = value
            if isinstance(value, str):
                try:
                    document = json.loads(value)
                except json.JSONDecodeError:
                    document = None

            if isinstance(document, dict):
                result.languages[key] = document
            else:
                invalid.append({
                    "type": "INVALID_LANGUAGE_RESULT",
                    "language": key,
                    "message": f"Translation for {key} is not a JSON object and was ignored",
                })

        result.warnings = list(result.warnings or []) + invalid
        return result


class Shipi18nAPI:
    """Shipi18n API client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key (falls back to SHIPI18N_API_KEY)
            base_url: Service URL (falls back to SHIPI18N_API_URL)
            timeout: Request timeout in seconds (falls back to SHIPI18N_TIMEOUT)
        """
        self.api_key = api_key or os.environ.get("SHIPI18N_API_KEY")
        self.base_url = (base_url or os.environ.get("SHIPI18N_API_URL") or DEFAULT_API_URL).rstrip("/")
        if timeout is None:
            raw_timeout = os.environ.get("SHIPI18N_TIMEOUT", DEFAULT_TIMEOUT)
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid SHIPI18N_TIMEOUT: {raw_timeout!r}",
                    suggestion="Set SHIPI18N_TIMEOUT to a number of seconds",
                ) from e
        self.timeout = timeout

    def _require_key(self) -> None:
        if not self.api_key:
            raise MissingAPIKeyError()

    def _request(self, method: str, path: str, fallback_message: str, **kwargs) -> requests.Response:
        """Send a request and turn failures into APIError."""
        self._require_key()

        headers = {"X-API-Key": self.api_key}
        headers.update(kwargs.pop("headers", {}))
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = requests.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise APIError(f"Could not connect to {self.base_url}: {e}", code="NETWORK_ERROR") from e

        if not response.ok:
            raise self._error_from_response(response, fallback_message)
        return response

    @staticmethod
    def _error_from_response(response: requests.Response, fallback_message: str) -> APIError:
        try:
            data = response.json()
        except ValueError:
            data = {"error": {"message": response.reason}}
        if not isinstance(data, dict):
            data = {}

        error = data.get("error") if isinstance(data.get("error"), dict) else {}
        message = error.get("message") or data.get("message") or f"{fallback_message}: {response.reason}"
        return APIError(message, code=error.get("code"), status=response.status_code)

    def translate_json(
        self,
        json_data: Any,
        target_languages: list[str],
        source_language: str = "en",
        preserve_placeholders: bool = True,
        html_handling: str = "none",
        skip_keys: Optional[list[str]] = None,
        skip_paths: Optional[list[str]] = None,
        context: Optional[dict[str, str]] = None,
        save_keys: bool = False,
    ) -> TranslationResult:
        """
        Translate a JSON document into several languages in one request.

        Args:
            json_data: Document (or already-serialized JSON text) to translate
            target_languages: Languages to request
            source_language: Source language code
            preserve_placeholders: Ask the service to keep {name}, {{value}}, etc.
            html_handling: none, strip, decode or preserve
            skip_keys: Exact key paths the service must not translate
            skip_paths: Wildcard path patterns the service must not translate
            context: Optional key path -> translator note annotations
            save_keys: Store translated keys in the account's key library

        Returns:
            TranslationResult
        """
        self._require_key()

        text = json_data if isinstance(json_data, str) else json.dumps(json_data, ensure_ascii=False)
        body = {
            "inputMethod": "text",
            "text": text,
            "sourceLanguage": source_language,
            "targetLanguages": json.dumps(target_languages),
            "preservePlaceholders": str(bool(preserve_placeholders)).lower(),
            "htmlHandling": html_handling,
            "skipKeys": list(skip_keys or []),
            "skipPaths": list(skip_paths or []),
            "saveKeys": str(bool(save_keys)).lower(),
        }
        if context:
            body["keyContext"] = context

        response = self._request(
            "POST", "/api/translate", "Translation failed",
            json=body,
            headers={"Content-Type": "application/json"},
        )
        return TranslationResult.from_response(response.json())

    def list_keys(self) -> dict:
        """List translation keys stored for the account."""
        return self._request("GET", "/api/keys", "Failed to list keys").json()

    def delete_key(self, key_id: str) -> dict:
        """Delete a translation key."""
        return self._request("DELETE", f"/api/keys/{key_id}", "Failed to delete key").json()

    def export_keys(self, export_format: str = "json") -> Any:
        """
        Export translation keys.

        Returns parsed JSON for the json format and raw text otherwise.
        """
        response = self._request("GET", f"/api/keys/export/{export_format}", "Failed to export keys")
        if export_format == "json":
            return response.json()
        return response.text
