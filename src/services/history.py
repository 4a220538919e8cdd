"""In-process generation history.

Keeps the most recent result per category plus a capped, newest-first log
of every generation. Nothing here awaits, so each mutation completes without
interleaving with other requests on the event loop.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from core.exceptions import HistoryItemNotFoundError
from schemas.history import HistoryItem


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


def _now_ms() -> int:
    return int(time.time() * 1000)


class HistoryStore:
    def __init__(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._clock = clock
        self._items: list[HistoryItem] = []
        self._latest: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._items)

    def record(self, *, type: str, category: str, data: Any, preview: str) -> HistoryItem:
        """Store ``data`` as the latest result for ``category`` and log it."""
        timestamp = self._clock()
        item = HistoryItem(
            id=f"{timestamp}_{uuid.uuid4().hex[:9]}",
            timestamp=timestamp,
            type=type,
            category=category,
            data=data,
            preview=preview,
        )
        self._latest[category] = data
        self._items.insert(0, item)
        del self._items[self.limit :]
        logger.debug("Recorded %s history item %s", category, item.id)
        return item

    def latest(self, category: str) -> Any | None:
        return self._latest.get(category)

    def list(self, type: str | None = None) -> list[HistoryItem]:
        if type is None:
            return list(self._items)
        return [item for item in self._items if item.type == type]

    def delete(self, item_id: str) -> None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                return
        raise HistoryItemNotFoundError(f"History item {item_id!r} not found")

    def clear(self) -> None:
        """Drop the history log; latest results per category are kept."""
        self._items.clear()
