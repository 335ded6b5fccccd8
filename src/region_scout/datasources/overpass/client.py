"""Overpass API transport.

API docs: https://wiki.openstreetmap.org/wiki/Overpass_API/Overpass_QL
"""

from __future__ import annotations

import logging

import requests

from region_scout.services.http import OVERPASS_RETRY, create_session

logger = logging.getLogger(__name__)

OVERPASS_API = "https://overpass-api.de/api/interpreter"

# Server-side query timeout is 180s; leave headroom for queueing.
DEFAULT_TIMEOUT = 200


class OverpassClient:
    """Submits Overpass QL text and returns the raw response body.

    An empty string means the request failed; callers treat it as "no data".
    """

    def __init__(
        self,
        url: str = OVERPASS_API,
        http: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.http = http or create_session(retry=OVERPASS_RETRY, timeout=DEFAULT_TIMEOUT)

    def query(self, text: str) -> str:
        """POST ``text`` to the interpreter endpoint."""
        try:
            resp = self.http.post(self.url, data={"data": text})
            resp.raise_for_status()
        except requests.HTTPError as exc:
            logger.warning("Overpass returned HTTP %s", exc.response.status_code)
            return ""
        except requests.RequestException as exc:
            logger.warning("Overpass request failed: %s", exc)
            return ""
        return resp.text
