# backend/notifeed/feed/cache.py

"""
組み立て済みフィードをトークンごとに短時間保持するインメモリキャッシュ。

GitHub API のレート制限対策が目的で、TTL（デフォルト 5 分）以内の
古いフィードを返すことは許容する。

- 期限切れエントリは get() からは見えない
- バックグラウンドスレッドが定期的（デフォルト 10 分）に期限切れを掃除する
- 複数リクエストから同時に読み書きされるので内部でロックする
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .schemas import JSONFeed

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """キャッシュ 1 件分（フィード + 失効時刻）。"""

    feed: JSONFeed
    expires_at: float


class FeedCache:
    """
    トークン → JSONFeed の TTL 付きキャッシュ。

    enabled=False の場合 set() は何もしない（毎回パイプラインを実行する）。
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 300,
        cleanup_interval_seconds: float = 600,
        enabled: bool = True,
        clock: Clock = time.monotonic,
    ) -> None:
        self._ttl = float(ttl_seconds)
        self._cleanup_interval = float(cleanup_interval_seconds)
        self._enabled = enabled
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        self._stop_event = threading.Event()
        self._janitor: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ---- 読み書き ------------------------------------------------------

    def get(self, key: str) -> Optional[JSONFeed]:
        """
        有効なエントリがあればフィードを返す。無い / 期限切れなら None。
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                # 見えないだけで、削除は掃除スレッドか次の set() に任せる
                return None
            return entry.feed

    def set(self, key: str, feed: JSONFeed) -> None:
        """
        フィードを保存する。同じキーの既存エントリは上書き。
        """
        if not self._enabled:
            return

        with self._lock:
            self._entries[key] = CacheEntry(feed=feed, expires_at=self._clock() + self._ttl)

    def delete_expired(self) -> int:
        """
        期限切れエントリを削除し、削除件数を返す。
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Purged %d expired feed(s) from cache", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # ---- 掃除スレッド --------------------------------------------------

    def start(self) -> None:
        """
        期限切れエントリの掃除スレッドを起動する（起動済みなら何もしない）。
        """
        if self._janitor is not None and self._janitor.is_alive():
            return

        self._stop_event.clear()
        self._janitor = threading.Thread(
            target=self._run_janitor,
            name="feed-cache-janitor",
            daemon=True,
        )
        self._janitor.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """
        掃除スレッドを停止する。
        """
        self._stop_event.set()
        if self._janitor is not None:
            self._janitor.join(timeout)
            self._janitor = None

    def _run_janitor(self) -> None:
        while not self._stop_event.wait(self._cleanup_interval):
            try:
                self.delete_expired()
            except Exception:  # noqa: BLE001 - 掃除の失敗でスレッドを止めない
                logger.exception("Feed cache cleanup failed. Retrying on next interval.")
