# src/library/catalog_client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class CatalogUnavailable(Exception):
    """Raised when the count or data artifact can't be fetched."""


@dataclass(frozen=True)
class CatalogPayload:
    count_text: str
    text: str


class AssetResolver:
    """
    Maps a track filename to its playable address by substitution into a
    fixed template, e.g. "https://host/music/{filename}".
    """

    def __init__(self, template: str):
        if "{filename}" not in template:
            raise ValueError(f"asset template has no {{filename}} placeholder: {template!r}")
        self.template = template

    def __call__(self, filename: str) -> str:
        return self.template.format(filename=quote(filename, safe="/"))


class CatalogClient:
    def __init__(self, catalog_url: str, count_url: str, timeout_s: float = 15.0,
                 user_agent: str = "shuffle-player/0.1"):
        self.catalog_url = catalog_url
        self.count_url = count_url
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def _get_text(self, url: str) -> str:
        try:
            r = self.session.get(url, timeout=self.timeout_s)
            r.raise_for_status()
        except requests.RequestException as e:
            raise CatalogUnavailable(f"{url}: {e}") from e
        r.encoding = "utf-8"
        return r.text

    def fetch_count(self) -> str:
        return self._get_text(self.count_url)

    def fetch_catalog(self) -> str:
        return self._get_text(self.catalog_url)

    def fetch(self) -> CatalogPayload:
        # count first: a zero count means there is no point pulling the data file
        count_text = self.fetch_count()
        if count_text.strip() == "0":
            logger.info("Catalog count is 0; skipping data fetch")
            return CatalogPayload(count_text=count_text, text="")
        text = self.fetch_catalog()
        logger.info("Fetched catalog (%d bytes)", len(text))
        return CatalogPayload(count_text=count_text, text=text)
