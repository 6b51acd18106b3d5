"""
Tests for link preview metadata.

HTTP is served by httpx.MockTransport; nothing touches the network.

## Test Perspectives Table
| Case ID | Input / Precondition | Perspective (Equivalence / Boundary) | Expected Result | Notes |
|---------|----------------------|---------------------------------------|-----------------|-------|
| TC-UM-01 | Page with OG + meta tags | Equivalence – parse | all fields | relative links resolved |
| TC-UM-02 | card() | Equivalence – display | og fields preferred | - |
| TC-UM-03 | Repeated / concurrent fetch | Equivalence – memoized | one request | - |
| TC-UM-04 | 404 / transport error | Abnormal – HTTP | None, cached | - |
| TC-UM-05 | Page without preview fields | Boundary – empty | None | - |
| TC-UM-06 | Not a URL | Abnormal – input | None, no request | - |
| TC-UM-07 | Body over the byte budget | Boundary – truncation | fields past cut lost | - |
| TC-UM-08 | Long streamed body | Boundary – download budget | reading stops at the cap | head still parsed |
"""

import asyncio

import httpx
import pytest

pytestmark = pytest.mark.integration

from src.enrichment.url_metadata import UrlMetadata, UrlMetadataClient, hostname, parse_metadata
from src.utils.config import EnrichmentConfig

ARTICLE_URL = "https://blog.example.com/posts/42"

ARTICLE_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title> Plain Title </title>
  <meta name="description" content="Plain description">
  <meta name="keywords" content="python, clipboard, , previews">
  <meta name="author" content="A. Writer">
  <meta property="og:title" content="Open Graph Title">
  <meta property="og:description" content="Open Graph description">
  <meta property="og:site_name" content="Example Blog">
  <meta property="og:image" content="/img/card.png">
  <link rel="canonical" href="/posts/42-clip-previews">
  <link rel="shortcut icon" href="/favicon.ico">
</head>
<body><p>Body text</p></body>
</html>
"""


class RecordingHandler:
    """MockTransport handler that counts requests."""

    def __init__(self, status_code: int = 200, html: str = ARTICLE_PAGE) -> None:
        self.status_code = status_code
        self.html = html
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, html=self.html)


def make_client(handler, config: EnrichmentConfig | None = None) -> UrlMetadataClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return UrlMetadataClient(config=config or EnrichmentConfig(), client=http)


class TestParseMetadata:
    """TC-UM-01: Tests for parse_metadata()."""

    def test_all_fields(self) -> None:
        metadata = parse_metadata(ARTICLE_PAGE, ARTICLE_URL)

        assert metadata.title == "Plain Title"
        assert metadata.description == "Plain description"
        assert metadata.og_title == "Open Graph Title"
        assert metadata.og_description == "Open Graph description"
        assert metadata.og_site_name == "Example Blog"
        assert metadata.author == "A. Writer"
        assert metadata.image == "https://blog.example.com/img/card.png"
        assert metadata.canonical == "https://blog.example.com/posts/42-clip-previews"
        assert metadata.favicon == "https://blog.example.com/favicon.ico"
        assert metadata.has_extra_info is True

    def test_keyword_list(self) -> None:
        metadata = parse_metadata(ARTICLE_PAGE, ARTICLE_URL)

        assert metadata.keyword_list() == ["python", "clipboard", "previews"]
        assert metadata.keyword_list(limit=1) == ["python"]

    def test_empty_page(self) -> None:
        metadata = parse_metadata("<html><body>hi</body></html>", ARTICLE_URL)

        assert metadata.is_empty is True
        assert metadata.keyword_list() == []

    def test_blank_meta_content_ignored(self) -> None:
        metadata = parse_metadata('<meta name="description" content="  ">', ARTICLE_URL)
        assert metadata.description is None

    def test_display_fallbacks(self) -> None:
        metadata = UrlMetadata(title="t", description="d")

        assert metadata.display_title == "t"
        assert metadata.display_description == "d"
        assert metadata.has_extra_info is False

    def test_hostname(self) -> None:
        assert hostname(ARTICLE_URL) == "blog.example.com"
        assert hostname("not a url") == ""


class TestUrlMetadataClient:
    """Tests for UrlMetadataClient."""

    @pytest.mark.asyncio
    async def test_card(self) -> None:
        """TC-UM-02: Open Graph fields win over plain ones."""
        handler = RecordingHandler()
        client = make_client(handler)

        card = await client.card(ARTICLE_URL)

        assert card is not None
        assert card.url == ARTICLE_URL
        assert card.hostname == "blog.example.com"
        assert card.title == "Open Graph Title"
        assert card.description == "Open Graph description"
        assert card.site_name == "Example Blog"
        assert card.keywords == ["python", "clipboard", "previews"]
        assert handler.requests[0].url == ARTICLE_URL

    @pytest.mark.asyncio
    async def test_keyword_limit_from_config(self) -> None:
        client = make_client(RecordingHandler(), EnrichmentConfig(max_keywords=2))

        card = await client.card(ARTICLE_URL)

        assert card.keywords == ["python", "clipboard"]

    @pytest.mark.asyncio
    async def test_fetched_once(self) -> None:
        """TC-UM-03: Sequential and concurrent fetches share one request."""
        handler = RecordingHandler()
        client = make_client(handler)

        first, second = await asyncio.gather(client.fetch(ARTICLE_URL), client.fetch(ARTICLE_URL))
        third = await client.fetch(f"  {ARTICLE_URL}\n")

        assert first == second == third
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_http_error_is_unavailable(self) -> None:
        """TC-UM-04: Error statuses resolve to None and are not refetched."""
        handler = RecordingHandler(status_code=404)
        client = make_client(handler)

        assert await client.card(ARTICLE_URL) is None
        assert await client.card(ARTICLE_URL) is None
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(refuse)

        assert await client.fetch(ARTICLE_URL) is None

    @pytest.mark.asyncio
    async def test_page_without_preview_fields(self) -> None:
        """TC-UM-05: Nothing to show means no preview."""
        client = make_client(RecordingHandler(html="<html><body>just text</body></html>"))

        assert await client.fetch(ARTICLE_URL) is None

    @pytest.mark.asyncio
    async def test_non_url_not_requested(self) -> None:
        """TC-UM-06: Non-URLs never hit the transport."""
        handler = RecordingHandler()
        client = make_client(handler)

        assert await client.fetch("ftp://files.example.com/x") is None
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_body_truncated_to_budget(self) -> None:
        """TC-UM-07: Only the first max_metadata_bytes are parsed."""
        page = "<html><head>" + " " * 200 + "<title>Late title</title></head></html>"
        client = make_client(RecordingHandler(html=page), EnrichmentConfig(max_metadata_bytes=100))

        assert await client.fetch(ARTICLE_URL) is None

    @pytest.mark.asyncio
    async def test_download_stops_at_budget(self) -> None:
        """TC-UM-08: The rest of a long body is never pulled from the wire."""
        # Given: a page whose head arrives first, followed by 100 KiB of body
        pulled = []

        async def body():
            chunks = [b"<html><head><title>Streamed title</title></head><body>"] + [b"x" * 1024] * 100
            for chunk in chunks:
                pulled.append(len(chunk))
                yield chunk

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"Content-Type": "text/html; charset=utf-8"}, content=body())

        client = make_client(handler, EnrichmentConfig(max_metadata_bytes=2048))

        # When: fetching
        metadata = await client.fetch(ARTICLE_URL)

        # Then: the head is parsed and only the first few chunks were read
        assert metadata is not None
        assert metadata.title == "Streamed title"
        assert len(pulled) == 3

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(RecordingHandler()))
        client = UrlMetadataClient(config=EnrichmentConfig(), client=http)

        await client.close()

        assert http.is_closed is False
        await http.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self) -> None:
        client = UrlMetadataClient(config=EnrichmentConfig())
        http = await client._get_client()

        await client.close()

        assert http.is_closed is True
