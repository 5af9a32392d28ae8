from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from ...models.articles import Article, ArticlePage, ArticleSource, Profile, Subscription


def _first_href(links: Any) -> str | None:
    if isinstance(links, list) and links and isinstance(links[0], dict):
        return links[0].get("href")
    return None


def _published(value: Any) -> datetime | None:
    """Feedly timestamps are milliseconds since the epoch."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return None


def parse_entry(item: Dict[str, Any]) -> Article:
    """Normalize one stream entry.

    Summary falls back to full content, URL to the first alternate link and
    visual to the first enclosure.
    """
    summary = (item.get("summary") or {}).get("content") or (item.get("content") or {}).get("content")
    origin = item.get("origin") or {}
    visual = (item.get("visual") or {}).get("url")
    if not visual or visual == "none":
        visual = _first_href(item.get("enclosure"))

    return Article(
        id=item["id"],
        title=item.get("title") or "",
        summary=summary or "No summary available",
        url=item.get("canonicalUrl") or _first_href(item.get("alternate")),
        published=_published(item.get("published")),
        author=item.get("author"),
        source=ArticleSource(title=origin.get("title"), website=origin.get("htmlUrl")),
        visual=visual,
        tags=[tag["label"] for tag in item.get("tags") or [] if isinstance(tag, dict) and tag.get("label")],
        engagement=int(item.get("engagement") or 0),
    )


def parse_stream(payload: Dict[str, Any], stream_id: str) -> ArticlePage:
    """Build an ArticlePage; entries without an id are skipped."""
    items = [parse_entry(item) for item in payload.get("items") or [] if isinstance(item, dict) and item.get("id")]
    return ArticlePage(
        stream_id=payload.get("id") or stream_id,
        items=items,
        continuation=payload.get("continuation"),
    )


def parse_profile(payload: Dict[str, Any]) -> Profile:
    return Profile(id=payload["id"], email=payload.get("email"), full_name=payload.get("fullName"))


def parse_subscriptions(payload: List[Dict[str, Any]]) -> List[Subscription]:
    return [
        Subscription(
            id=sub["id"],
            title=sub.get("title") or "",
            website=sub.get("website"),
            categories=[c.get("label", "") for c in sub.get("categories") or [] if isinstance(c, dict)],
        )
        for sub in payload
        if isinstance(sub, dict) and sub.get("id")
    ]
