"""HTML rendering for Pinterest Feed."""

import html
from urllib.parse import urlparse

from .models import FeedItem

NO_ITEMS_MARKUP = "<p>No Pinterest images found.</p>"

ITEM_TEMPLATE = (
    '<li><a href="{link}" target="_blank" rel="noopener">'
    '<img src="{image_url}" alt="{title}"></a></li>'
)

ALLOWED_URL_SCHEMES = ("http", "https")

# 3-column grid; padding-bottom: 100% keeps every cell square
FEED_STYLES = """
<style>
    ul.pinterest-feed {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 20px;
        list-style: none;
        padding: 0;
        margin: 0;
    }
    ul.pinterest-feed a img {
        width: 100%;
        height: 100%;
        position: absolute;
        top: 0;
        left: 0;
        object-fit: cover;
        display: block;
    }
    ul.pinterest-feed li a {
        padding-bottom: 100%;
        position: relative;
        display: block;
        height: 0;
        width: 100%;
    }
    ul.pinterest-feed li {
        margin: 0;
        padding: 0;
    }
</style>"""


def escape_url(url: str) -> str:
    """Escape a URL for an href/src attribute.

    URLs with a scheme other than http or https (javascript:, data:, ...)
    and URLs that cannot be parsed are dropped and render as an empty
    attribute.
    """
    url = (url or "").strip()
    if not url:
        return ""

    try:
        scheme = urlparse(url).scheme.lower()
    except ValueError:
        # e.g. an unbalanced "[" in the host
        return ""
    if scheme and scheme not in ALLOWED_URL_SCHEMES:
        return ""

    return html.escape(url, quote=True)


def escape_attr(text: str) -> str:
    """Escape text for a double-quoted HTML attribute."""
    return html.escape(text or "", quote=True)


class Renderer:
    """Turns feed items into a list of linked images."""

    def render(self, items: list[FeedItem]) -> str:
        if not items:
            return NO_ITEMS_MARKUP

        parts = ['<ul class="pinterest-feed">']
        for item in items:
            parts.append(
                ITEM_TEMPLATE.format(
                    link=escape_url(item.link),
                    image_url=escape_url(item.image_url),
                    title=escape_attr(item.title),
                )
            )
        parts.append("</ul>")
        parts.append(FEED_STYLES)

        return "".join(parts)
