"""Nominatim API transport.

API docs: https://nominatim.org/release-docs/latest/api/Lookup/
Usage policy requires an identifying User-Agent and at most 1 request/second;
throttling is left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from region_scout.services.http import session as default_session

logger = logging.getLogger(__name__)

NOMINATIM_API = "https://nominatim.openstreetmap.org"


class NominatimClient:
    """Issues GET requests against a Nominatim instance.

    An empty string means the request failed; callers treat it as "no data".
    """

    def __init__(
        self,
        url: str = NOMINATIM_API,
        http: requests.Session | None = None,
        accept_language: str = "en",
    ) -> None:
        self.url = url.rstrip("/")
        self.http = http or default_session
        self.accept_language = accept_language

    def get(self, endpoint: str, params: dict[str, Any]) -> str:
        """GET ``/{endpoint}`` with ``format=jsonv2`` added."""
        query: dict[str, Any] = {
            "format": "jsonv2",
            "accept-language": self.accept_language,
            **params,
        }
        try:
            resp = self.http.get(f"{self.url}/{endpoint.lstrip('/')}", params=query)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            logger.warning("Nominatim returned HTTP %s", exc.response.status_code)
            return ""
        except requests.RequestException as exc:
            logger.warning("Nominatim request failed: %s", exc)
            return ""
        return resp.text
