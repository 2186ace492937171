"""Development preview reload signalling."""

from __future__ import annotations

import logging

import httpx

LOGGER = logging.getLogger(__name__)

RELOAD_PATH = "/__reload"


class PreviewNotifier:
    """Tells a running preview server that the menu changed.

    Failures are logged only; a missing preview server must not stop the
    watcher.
    """

    def __init__(self, base_url: str, *, timeout: float = 2.0, client: httpx.Client | None = None) -> None:
        self.url = base_url.rstrip("/") + RELOAD_PATH
        self._client = client or httpx.Client(timeout=timeout)

    def __call__(self) -> None:
        try:
            response = self._client.post(self.url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            LOGGER.warning("Preview reload failed (%s): %s", self.url, exc)
            return
        LOGGER.debug("Preview reload sent to %s", self.url)

    def close(self) -> None:
        self._client.close()
