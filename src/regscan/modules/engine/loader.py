"""Locate the axe-core script: configured file, local cache, or CDN download."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from regscan.config import DEFAULT_AXE_VERSION
from regscan.errors import RuleEngineError

logger = logging.getLogger(__name__)

AXE_CDN_URL = "https://cdn.jsdelivr.net/npm/axe-core@{version}/axe.min.js"


class AxeSourceLoader:
    """Resolve the axe-core source once and keep it in memory."""

    def __init__(
        self,
        cache_dir: Path,
        source_path: Path | None = None,
        version: str = DEFAULT_AXE_VERSION,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.cache_dir = cache_dir
        self.source_path = source_path
        self.version = version
        self._client = client
        self._timeout = timeout
        self._source: str | None = None

    @property
    def cache_file(self) -> Path:
        return self.cache_dir / f"axe-core-{self.version}.min.js"

    @property
    def download_url(self) -> str:
        return AXE_CDN_URL.format(version=self.version)

    async def load(self) -> str:
        if self._source is None:
            self._source = await self._resolve()
        return self._source

    async def _resolve(self) -> str:
        if self.source_path is not None:
            try:
                return self.source_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise RuleEngineError(
                    f"Cannot read axe-core source {self.source_path}: {exc}"
                ) from exc

        cached = self.get_cached_source()
        if cached:
            return cached

        source = await self._download()
        self.cache_source(source)
        return source

    def get_cached_source(self) -> str | None:
        if not self.cache_file.exists():
            return None
        try:
            text = self.cache_file.read_text(encoding="utf-8")
        except OSError:
            logger.warning("Ignoring unreadable axe-core cache %s", self.cache_file, exc_info=True)
            return None
        return text or None

    def cache_source(self, source: str) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache_file.write_text(source, encoding="utf-8")
        except OSError:
            logger.warning("Could not cache axe-core at %s", self.cache_file, exc_info=True)

    async def _download(self) -> str:
        url = self.download_url
        logger.info("Downloading axe-core %s from %s", self.version, url)
        try:
            if self._client is not None:
                response = await self._client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RuleEngineError(f"Could not download axe-core {self.version}: {exc}") from exc
        if not response.text.strip():
            raise RuleEngineError(f"Downloaded axe-core {self.version} is empty")
        return response.text
