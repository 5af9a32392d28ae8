from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict

from ..config.constants import DEDUP_WINDOW_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateCheck:
    fingerprint: str
    duplicate: bool


class IdempotencyCache:
    """
    Absorbs repeated side-effecting actions within a short window.

    The window is fixed from the first sighting of a fingerprint; repeats do
    not extend it. Expired entries are swept on every check, so no background
    task is needed. State is per instance and per process only.
    """

    def __init__(
        self,
        window_seconds: float = DEDUP_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.window = window_seconds
        self._clock = clock
        self._first_seen: Dict[str, float] = {}

    def check_and_record(self, fingerprint: str) -> DuplicateCheck:
        now = self._clock()
        first_seen = self._first_seen.get(fingerprint)
        if first_seen is not None and now - first_seen < self.window:
            logger.info(
                "Duplicate request blocked: %s (age: %dms)",
                fingerprint, int((now - first_seen) * 1000),
            )
            return DuplicateCheck(fingerprint, duplicate=True)

        self._first_seen[fingerprint] = now
        self._sweep(now)
        return DuplicateCheck(fingerprint, duplicate=False)

    def is_duplicate_request(self, fingerprint: str) -> bool:
        return self.check_and_record(fingerprint).duplicate

    def sweep(self) -> int:
        return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        expired = [k for k, ts in self._first_seen.items() if now - ts >= self.window]
        for k in expired:
            self._first_seen.pop(k, None)
        if expired:
            logger.debug("Swept %d expired fingerprint(s), %d live", len(expired), len(self._first_seen))
        return len(expired)

    def __len__(self) -> int:
        return len(self._first_seen)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._first_seen


def mark_read_fingerprint(article_id: str) -> str:
    return f"mark_read_{article_id}"


def bookmark_fingerprint(article_id: str, title: str | None) -> str:
    # Title is part of the key so that distinct saves of one entry are not merged
    return f"instapaper_{article_id}_{title}"
