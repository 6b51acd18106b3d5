"""
Link preview metadata for URL clips.

Fetches the page once per URL and extracts title, description, Open Graph
fields, keywords, author, canonical link and favicon. A page that yields
none of title / description / image / og:title is treated as unavailable,
and so is any fetch error; both are cached so the URL is not refetched.
"""

from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from src.classifier.signals import is_url
from src.enrichment.cache import EnrichmentCache
from src.utils.config import EnrichmentConfig, get_settings
from src.utils.errors import EnrichmentUnavailableError
from src.utils.logging import get_logger

logger = get_logger(__name__)


class UrlMetadata(BaseModel):
    """Metadata shown on a link preview card."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_site_name: str | None = None
    keywords: str | None = None
    author: str | None = None
    canonical: str | None = None
    favicon: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.description or self.image or self.og_title)

    @property
    def display_title(self) -> str | None:
        return self.og_title or self.title

    @property
    def display_description(self) -> str | None:
        return self.og_description or self.description

    @property
    def has_extra_info(self) -> bool:
        return bool(self.keywords or self.author or self.og_site_name or self.canonical)

    def keyword_list(self, limit: int = 8) -> list[str]:
        if not self.keywords:
            return []
        return [kw.strip() for kw in self.keywords.split(",") if kw.strip()][:limit]


class LinkCard(BaseModel):
    """Display-ready link preview."""

    url: str
    hostname: str = ""
    title: str | None = None
    description: str | None = None
    image: str | None = None
    favicon: str | None = None
    site_name: str | None = None
    keywords: list[str] = Field(default_factory=list)
    author: str | None = None
    canonical: str | None = None


def hostname(url: str) -> str:
    """Host part of a URL, or "" if it cannot be parsed."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def _meta(soup: BeautifulSoup, *, name: str | None = None, prop: str | None = None) -> str | None:
    attrs = {"name": name} if name else {"property": prop}
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = tag.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    return content.strip()


def parse_metadata(html: str, url: str) -> UrlMetadata:
    """Extract link preview fields from an HTML page.

    Args:
        html: Page HTML (the <head> is enough).
        url: Page URL, used to resolve relative favicon/image links.

    Returns:
        UrlMetadata (possibly empty).
    """
    soup = BeautifulSoup(html, "html.parser")

    title = None
    if soup.title is not None and soup.title.string:
        title = soup.title.string.strip() or None

    image = _meta(soup, prop="og:image")
    canonical = None
    favicon = None
    for link in soup.find_all("link", href=True):
        rel = [r.lower() for r in (link.get("rel") or [])]
        if "canonical" in rel and canonical is None:
            canonical = urljoin(url, link["href"])
        if "icon" in rel and favicon is None:
            favicon = urljoin(url, link["href"])

    return UrlMetadata(
        title=title,
        description=_meta(soup, name="description"),
        image=urljoin(url, image) if image else None,
        og_title=_meta(soup, prop="og:title"),
        og_description=_meta(soup, prop="og:description"),
        og_site_name=_meta(soup, prop="og:site_name"),
        keywords=_meta(soup, name="keywords"),
        author=_meta(soup, name="author"),
        canonical=canonical,
        favicon=favicon,
    )


class UrlMetadataClient:
    """Fetches and caches link preview metadata per URL."""

    def __init__(
        self,
        config: EnrichmentConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Enrichment settings (defaults to configured settings).
            client: Optional pre-built HTTP client (tests inject a mock transport).
        """
        self._config = config or get_settings().enrichment
        self._client = client
        self._owns_client = client is None
        self._cache: EnrichmentCache[str, UrlMetadata] = EnrichmentCache("url_metadata", self._load)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.url_timeout_seconds,
                headers={"User-Agent": self._config.user_agent},
                follow_redirects=True,
            )
        return self._client

    async def _load(self, url: str) -> UrlMetadata:
        if not is_url(url):
            raise EnrichmentUnavailableError("url_metadata", url, "not an http(s) URL")

        client = await self._get_client()
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            body = await self._read_head(response)
            final_url = str(response.url)

        metadata = parse_metadata(body, final_url)
        if metadata.is_empty:
            raise EnrichmentUnavailableError("url_metadata", url, "no preview fields")

        logger.debug("Fetched URL metadata", url=url, title=metadata.display_title)
        return metadata

    async def _read_head(self, response: httpx.Response) -> str:
        """Read at most max_metadata_bytes of the body and decode it."""
        limit = self._config.max_metadata_bytes
        received = bytearray()
        async for chunk in response.aiter_bytes():
            received.extend(chunk)
            if len(received) >= limit:
                break
        encoding = response.charset_encoding or "utf-8"
        return bytes(received[:limit]).decode(encoding, errors="replace")

    async def fetch(self, url: str) -> UrlMetadata | None:
        """Metadata for a URL, or None when no preview is available."""
        return await self._cache.get(url.strip())

    async def card(self, url: str) -> LinkCard | None:
        """Display-ready link card, or None when no preview is available."""
        metadata = await self.fetch(url)
        if metadata is None:
            return None
        return LinkCard(
            url=url.strip(),
            hostname=hostname(url.strip()),
            title=metadata.display_title,
            description=metadata.display_description,
            image=metadata.image,
            favicon=metadata.favicon,
            site_name=metadata.og_site_name,
            keywords=metadata.keyword_list(self._config.max_keywords),
            author=metadata.author,
            canonical=metadata.canonical,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
