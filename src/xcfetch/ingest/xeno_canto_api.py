"""Client for the xeno-canto recordings API (v3) using an API key."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from xcfetch.errors import (
    APIError,
    AudioFetchError,
    HTTPStatusError,
    MalformedResponseError,
    RecordingNotFoundError,
    TransportError,
)

API_URL = "https://xeno-canto.org/api/3/recordings"
USER_AGENT = "xcfetch/0.1 (+https://xeno-canto.org)"


class XenoCantoClient:
    """Thin wrapper around the recordings endpoint that injects the API key and classifies errors."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
        base_url: str = API_URL,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.base_url = base_url

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        headers = kwargs.pop("headers", {})
        headers.setdefault("User-Agent", USER_AGENT)
        return self.session.get(url, headers=headers, timeout=self.timeout, **kwargs)

    def fetch_recording(self, xc_id: int) -> Dict[str, Any]:
        """Look up one catalogue number and return the first matching recording."""
        params = {"query": f"nr:{xc_id}", "key": self.api_key}
        logging.info("Fetching XC%d...", xc_id)
        try:
            response = self._get(self.base_url, params=params)
        except requests.RequestException as exc:
            raise TransportError(f"Request for XC{xc_id} failed: {exc}") from exc

        if not response.ok:
            raise HTTPStatusError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"Response for XC{xc_id} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Response for XC{xc_id} is not a JSON object")

        if "error" in payload:
            error = payload["error"]
            if isinstance(error, dict) and "message" in error:
                error = error["message"]
            raise APIError(str(error))

        recordings = payload.get("recordings")
        if not isinstance(recordings, list) or not recordings:
            raise RecordingNotFoundError(xc_id)
        if len(recordings) > 1:
            # Ambiguous queries can match several recordings; only the first is used.
            logging.debug("Ignoring %d additional matches for XC%d", len(recordings) - 1, xc_id)

        record = recordings[0]
        if not isinstance(record, dict):
            raise MalformedResponseError(f"Recording entry for XC{xc_id} is not a JSON object")
        return record

    def download(self, url: str) -> bytes:
        """Fetch a binary asset such as the recording audio."""
        try:
            response = self._get(url)
        except requests.RequestException as exc:
            raise AudioFetchError(f"Failed to download audio from {url}: {exc}") from exc
        if not response.ok:
            raise AudioFetchError(f"Failed to download audio: HTTP {response.status_code}")
        return response.content
