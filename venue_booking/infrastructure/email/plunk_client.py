from __future__ import annotations

import logging
from typing import Any

import httpx

from venue_booking.application.exceptions import ConfigurationError


class PlunkClient:
    def __init__(self, api_token: str, send_endpoint: str, timeout: float = 10.0) -> None:
        if not api_token:
            raise ConfigurationError("PLUNK_API_TOKEN is required for the Plunk email transport")
        self._api_token = api_token
        self._send_endpoint = send_endpoint
        self._client = httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def send(self, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._api_token}"}
        resp = self._client.post(self._send_endpoint, json=payload, headers=headers)
        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("message") or resp.text
            except ValueError:
                error_message = resp.text
            self._logger.error(
                "Plunk send failed",
                extra={"status": resp.status_code, "error": error_message},
            )
            resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
