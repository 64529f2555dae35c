"""
PresetCatalog - Reads the preset list and resolves sample URLs.
"""

from __future__ import annotations
from typing import List, Optional
import logging

import httpx

from .errors import CatalogError
from .models import Preset

logger = logging.getLogger(__name__)


class UrlResolver:
    """
    Turns catalog sample URLs into fetchable ones.

    Absolute ``http(s)://`` URLs pass through untouched. Anything else is a
    path relative to the presets folder on the API host: a leading ``./`` or
    ``/`` is dropped and spaces are percent-encoded.

        >>> UrlResolver("http://localhost:3000")("./808/Kick 01.wav")
        'http://localhost:3000/presets/808/Kick%2001.wav'
    """

    def __init__(self, api_base: str, presets_path: str = "/presets"):
        self.api_base = api_base.rstrip("/")
        self.presets_path = "/" + presets_path.strip("/") if presets_path.strip("/") else ""

    def __call__(self, url: Optional[str]) -> Optional[str]:
        if not url or not url.strip():
            return None
        url = url.strip()
        if url.startswith(("http://", "https://")):
            return url

        if url.startswith("./"):
            url = url[2:]
        path = url.lstrip("/").replace(" ", "%20")
        # Catalog entries sometimes already carry the presets prefix
        prefix = self.presets_path.lstrip("/") + "/"
        if prefix != "/" and path.startswith(prefix):
            path = path[len(prefix):]
        return f"{self.api_base}{self.presets_path}/{path}"


class PresetCatalog:
    """
    Client for ``GET <base>/api/presets``.

    ``fetch()`` degrades to an empty list on any failure (logged);
    ``fetch_strict()`` raises CatalogError instead.
    """

    def __init__(self, api_base: str, catalog_path: str = "/api/presets",
                 client: httpx.AsyncClient = None, timeout: float = 30.0):
        self.api_base = api_base.rstrip("/")
        self.catalog_path = "/" + catalog_path.lstrip("/")
        self._client = client
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.api_base}{self.catalog_path}"

    async def fetch_strict(self) -> List[Preset]:
        try:
            if self._client is not None:
                response = await self._client.get(self.url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    response = await client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise CatalogError(f"could not fetch presets from {self.url}: {e}") from e

        if not isinstance(payload, list):
            raise CatalogError(f"expected a JSON list from {self.url}, got {type(payload).__name__}")

        presets = []
        for i, entry in enumerate(payload):
            if not isinstance(entry, dict):
                logger.warning("Skipping preset #%d: not an object", i)
                continue
            try:
                presets.append(Preset.from_dict(entry))
            except ValueError as e:
                logger.warning("Skipping preset #%d: %s", i, e)
        logger.info("Catalog: %d presets from %s", len(presets), self.url)
        return presets

    async def fetch(self) -> List[Preset]:
        try:
            return await self.fetch_strict()
        except CatalogError as e:
            logger.warning("Preset catalog unavailable, continuing with none: %s", e)
            return []
