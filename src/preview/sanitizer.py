"""
Allow-list HTML sanitizer for HTML previews.

Clip HTML comes from arbitrary web pages and documents, so only a small set
of presentational tags and attributes survives:
- script/style-like elements are removed together with their content
- any other tag outside the allow-list is unwrapped (its text is kept)
- attributes outside the allow-list are dropped, as are script URLs
- images load lazily; links open in a new window without an opener
"""

import re

from bs4 import BeautifulSoup, Comment

from src.utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_TAGS = frozenset(
    {
        "b", "i", "em", "strong", "a", "p", "br", "ul", "ol", "li",
        "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "code", "pre",
        "span", "div", "table", "tr", "td", "th", "thead", "tbody", "img",
    }
)  # fmt: skip

ALLOWED_ATTRS = frozenset(
    {"href", "target", "rel", "class", "style", "src", "alt", "width", "height", "loading"}
)

DROP_WITH_CONTENT = frozenset(
    {"script", "style", "noscript", "template", "iframe", "object", "embed", "svg", "math"}
)

URL_ATTRS = frozenset({"href", "src"})

_URL_NOISE = re.compile(r"[\t\n\r]|^[\x00-\x20]+")
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
_SAFE_SCHEMES = frozenset({"http", "https", "mailto", "tel"})
_UNSAFE_STYLE = re.compile(r"expression\s*\(|javascript:|url\s*\(", re.IGNORECASE)


def _is_safe_url(attr: str, value: str) -> bool:
    # Browsers drop tab, LF and CR anywhere in a URL and leading controls or spaces
    value = _URL_NOISE.sub("", value)
    match = _SCHEME.match(value)
    if match is None:
        # Relative URL or fragment
        return True
    scheme = match.group(1).lower()
    if scheme in _SAFE_SCHEMES:
        return True
    return attr == "src" and value.lower().startswith("data:image/")


def _clean_attrs(tag) -> None:
    cleaned = {}
    for name, value in tag.attrs.items():
        name = name.lower()
        if name not in ALLOWED_ATTRS:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        if name in URL_ATTRS and not _is_safe_url(name, value):
            continue
        if name == "style" and _UNSAFE_STYLE.search(value):
            continue
        cleaned[name] = value
    tag.attrs = cleaned


def sanitize_html(html: str) -> str:
    """Sanitize HTML down to the preview allow-list.

    Args:
        html: Untrusted HTML fragment or document.

    Returns:
        Sanitized HTML string (may be empty).
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(list(DROP_WITH_CONTENT)):
        # Nested inside an element removed earlier in this loop
        if tag.decomposed:
            continue
        tag.decompose()

    removed = 0
    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            removed += 1
            continue

        _clean_attrs(tag)

        if tag.name == "img":
            tag["loading"] = "lazy"
        elif tag.name == "a":
            tag["target"] = "_blank"
            tag["rel"] = "noopener noreferrer"

    if removed:
        logger.debug("Unwrapped disallowed tags", count=removed)

    return str(soup)
