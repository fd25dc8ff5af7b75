# backend/notifeed/feed/service.py

"""
通知 → JSON Feed 変換パイプラインのサービス層。

キャッシュ確認 → GitHub クライアント生成 → 通知一覧取得 → URL 解決（並列）
→ 並べ替え・エンベロープ化 → キャッシュ保存、までを 1 回の呼び出しで行う。
"""

import logging
from typing import Callable, ContextManager, List, Optional, Protocol

from notifeed.github.client import GitHubAPIError, GitHubClient
from notifeed.github.config import GitHubSettings, get_github_settings
from notifeed.github.schemas import GitHubNotification

from .assembler import FeedAssembler
from .cache import FeedCache
from .config import FeedSettings
from .resolver import URLResolver
from .schemas import JSONFeed

logger = logging.getLogger(__name__)


class NotificationSource(Protocol):
    """
    パイプラインが使う GitHub クライアントのインターフェース。
    """

    def list_notifications(self) -> List[GitHubNotification]:  # pragma: no cover - Protocol
        ...

    def get_subject_html_url(self, subject_url: str) -> str:  # pragma: no cover - Protocol
        ...


# トークン → with 文で使えるクライアント
ClientFactory = Callable[[str], ContextManager[NotificationSource]]


class FeedService:
    """
    プロセスに 1 つだけ作り、全リクエストで共有するパイプライン。

    共有状態はキャッシュだけで、GitHub クライアントはリクエストごとに
    トークンから生成して使い捨てる。
    """

    def __init__(
        self,
        settings: FeedSettings,
        *,
        github_settings: Optional[GitHubSettings] = None,
        cache: Optional[FeedCache] = None,
        client_factory: Optional[ClientFactory] = None,
        resolver: Optional[URLResolver] = None,
    ) -> None:
        self._settings = settings
        self._github_settings = github_settings or get_github_settings()
        self._cache = cache or FeedCache(
            ttl_seconds=settings.cache_ttl_seconds,
            cleanup_interval_seconds=settings.cache_cleanup_interval_seconds,
            enabled=settings.cache_enabled,
        )
        self._client_factory = client_factory or self._default_client_factory
        self._resolver = resolver or URLResolver(self._github_settings)
        self._assembler = FeedAssembler(settings.feed_url)

        if not self._cache.enabled:
            logger.debug("caching response is disabled")

    @property
    def cache(self) -> FeedCache:
        return self._cache

    @property
    def settings(self) -> FeedSettings:
        return self._settings

    def _default_client_factory(self, token: str) -> GitHubClient:
        return GitHubClient(token, self._github_settings)

    def get_feed(self, token: str) -> JSONFeed:
        """
        トークンに対応するフィードを返す。

        :raises ValueError: トークンが空の場合（エントリポイントで弾いておくこと）
        :raises GitHubAPIError: 通知一覧の取得に失敗した場合（キャッシュには保存しない）
        """
        if not token:
            raise ValueError("token must not be empty")

        logger.debug("Check if not already in cache")
        cached = self._cache.get(token)
        if cached is not None:
            logger.info("Found in cache, send it!")
            return cached

        with self._client_factory(token) as client:
            logger.debug("List unread notifications")
            try:
                notifications = client.list_notifications()
            except GitHubAPIError as exc:
                logger.error("Error on notifications list: %s", exc)
                raise

            logger.info("Found %d notifications", len(notifications))
            items = self._resolver.resolve_all(client, notifications)

        feed = self._assembler.assemble(items)

        if self._cache.enabled:
            logger.info("Store in cache")
            self._cache.set(token, feed)

        return feed
