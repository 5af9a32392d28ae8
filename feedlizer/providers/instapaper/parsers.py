from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List

from ...models.articles import Bookmark


def parse_bookmarks(payload: Any) -> List[Bookmark]:
    """Bookmarks from a ``bookmarks/list`` response, newest first.

    The response mixes ``user``, ``meta`` and ``bookmark`` items; only
    bookmarks with a usable URL are kept.
    """
    if isinstance(payload, dict):
        # Newer API versions wrap the list
        payload = payload.get("bookmarks", [])
    if not isinstance(payload, list):
        return []

    bookmarks = []
    for item in payload:
        if not isinstance(item, dict) or item.get("type") != "bookmark":
            continue
        url = item.get("url")
        if not url or url == "undefined":
            continue
        ts = item.get("time")
        bookmarks.append(Bookmark(
            id=int(item["bookmark_id"]),
            url=url,
            title=item.get("title") or "",
            description=item.get("description") or "",
            time=datetime.fromtimestamp(ts, tz=timezone.utc) if isinstance(ts, (int, float)) else None,
            starred=str(item.get("starred")) == "1",
            progress=float(item.get("progress") or 0),
        ))

    bookmarks.sort(key=lambda b: b.time.timestamp() if b.time else 0.0, reverse=True)
    return bookmarks
