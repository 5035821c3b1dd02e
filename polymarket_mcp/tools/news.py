"""News headlines from Google News RSS (free, no API key)."""

import re
from typing import List, Optional

from pydantic import BaseModel, Field

from polymarket_mcp.tools.base import ToolResult, ToolSpec
from polymarket_mcp.types import NewsHeadline
from polymarket_mcp.utils.http import get_text

GOOGLE_NEWS_RSS = "https://news.google.com/rss/search"
NEWS_TIMEOUT = 10  # seconds

_ITEM_RE = re.compile(r"<item>(.*?)</item>", re.DOTALL)
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_ENTITIES = [
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
]


class GetNewsArgs(BaseModel):
    query: str = Field(
        ..., min_length=1, description="News search query (e.g., 'Bitcoin price', 'Trump tariffs', 'NBA playoffs')"
    )
    limit: int = Field(5, ge=1, le=10, description="Number of headlines (1-10)")


def extract_tag(xml: str, tag: str) -> Optional[str]:
    match = re.search(rf"<{tag}[^>]*>(.*?)</{tag}>", xml, re.DOTALL)
    return match.group(1) if match else None


def decode_xml_entities(text: str) -> str:
    text = _CDATA_RE.sub(r"\1", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def parse_rss_items(xml: str, max_results: int) -> List[NewsHeadline]:
    headlines: List[NewsHeadline] = []
    for match in _ITEM_RE.finditer(xml):
        if len(headlines) >= max_results:
            break
        item = match.group(1)
        title = extract_tag(item, "title")
        if not title:
            continue
        headlines.append(
            NewsHeadline(
                title=decode_xml_entities(title),
                source=extract_tag(item, "source") or "Unknown",
                pub_date=extract_tag(item, "pubDate") or "",
                link=extract_tag(item, "link") or "",
            )
        )
    return headlines


def fetch_news_headlines(query: str, max_results: int) -> List[NewsHeadline]:
    xml = get_text(
        GOOGLE_NEWS_RSS,
        params={"q": query, "hl": "en", "gl": "US", "ceid": "US:en"},
        what="news",
        timeout=NEWS_TIMEOUT,
    )
    return parse_rss_items(xml, max_results)


def get_news(args: GetNewsArgs) -> ToolResult:
    headlines = fetch_news_headlines(args.query, args.limit)
    if not headlines:
        return ToolResult.message(f'No recent news found for "{args.query}"')
    return ToolResult.ok({"count": len(headlines), "headlines": headlines})


def news_tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_get_news",
            description=(
                "Fetch recent news headlines for a topic via Google News RSS. Useful for understanding current "
                "events and market context when analyzing prediction markets. No API key required."
            ),
            args_model=GetNewsArgs,
            handler=get_news,
            error_prefix="Error fetching news",
        ),
    ]
