from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from routine_builder.application.dto.catalog_payload import CatalogPayloadDTO
from routine_builder.application.exceptions import CatalogUnavailableError
from routine_builder.application.ports.catalog import CatalogProviderPort
from routine_builder.domain.entities.product import Product


logger = logging.getLogger(__name__)


def parse_catalog(payload: Any) -> list[Product]:
    try:
        return CatalogPayloadDTO.model_validate(payload).extract_products()
    except ValidationError as e:
        raise CatalogUnavailableError(f"Malformed catalog payload: {e.error_count()} error(s)") from e


class JsonFileCatalog(CatalogProviderPort):
    def __init__(self, path: str) -> None:
        self._path = Path(path)

    async def load_products(self) -> list[Product]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (ValueError, OSError) as e:
            logger.error("Catalog file failed to load", extra={"reason": str(e)})
            raise CatalogUnavailableError(f"{self._path} failed to load") from e
        return parse_catalog(payload)


class HttpCatalog(CatalogProviderPort):
    def __init__(self, url: str, client: httpx.AsyncClient | None = None) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=10.0)

    async def load_products(self) -> list[Product]:
        try:
            resp = await self._client.get(self._url)
        except httpx.HTTPError as e:
            logger.error("Catalog request failed", extra={"reason": str(e)})
            raise CatalogUnavailableError(f"{self._url} failed to load") from e

        if resp.status_code >= 400:
            logger.error("Catalog request rejected", extra={"status_code": resp.status_code})
            raise CatalogUnavailableError(f"{self._url} returned {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise CatalogUnavailableError(f"{self._url} returned invalid JSON") from e
        return parse_catalog(payload)
