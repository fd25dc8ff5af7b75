# backend/notifeed/feed/resolver.py

"""
GitHub 通知をブラウザで開ける URL を持つ FeedItem に変換するモジュール。

通知 API が返すのは API 用の URL（https://api.github.com/repos/...）なので、
通知ごとにサブジェクトを GET して html_url を取りに行く。
この GET は通知件数ぶん並列に実行し、全件終わるまで待つ（fork-join）。

1 件の解決失敗はその通知だけのフォールバック URL で済ませ、
パイプライン全体は止めない。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

from notifeed.github.client import GitHubClientError
from notifeed.github.config import GitHubSettings, get_github_settings
from notifeed.github.schemas import GitHubNotification

from .schemas import FeedItem

logger = logging.getLogger(__name__)


class SubjectLookup(Protocol):
    """
    サブジェクト URL → html_url を解決できるクライアントのインターフェース。

    GitHubClient がこれを満たす。テストではダミーを渡す。
    """

    def get_subject_html_url(self, subject_url: str) -> str:  # pragma: no cover - Protocol
        ...


def format_rfc3339(value: datetime) -> str:
    """
    datetime を UTC の RFC3339 文字列（例: 2024-01-02T03:04:05Z）にする。
    タイムゾーン無しの値は UTC とみなす。
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_title(notification: GitHubNotification) -> str:
    """
    フィードのタイトル: "[{種別}] {owner/repo} - {タイトル}"
    """
    return (
        f"[{notification.subject.type}] "
        f"{notification.repository.full_name} - {notification.subject.title}"
    )


class URLResolver:
    """
    通知リストを FeedItem リストに変換するリゾルバ。

    - 各通知の処理は独立しており、結果は通知と同じインデックスのスロットに書く
    - スロットはタスクごとに 1 つだけなのでロックは不要
    - 全タスクの完了を待ってから返す。個別の失敗で他のタスクは止めない
    """

    def __init__(
        self,
        settings: Optional[GitHubSettings] = None,
        *,
        max_workers: Optional[int] = None,
    ) -> None:
        self._settings = settings or get_github_settings()
        # None の場合は通知件数ぶんのスレッドを使う
        self._max_workers = max_workers

    def default_url(self, subject_url: str) -> str:
        """
        API URL をブラウザ URL の形に文字列置換する。

        - "{api_base_url}/repos" → "{web_base_url}"
        - "pulls" → "pull"（PR は API とブラウザでパスが違う）

        プライベートリポジトリなどで html_url が取れなかった場合のフォールバック。
        """
        url = subject_url.replace(
            f"{self._settings.api_base_url}/repos",
            self._settings.web_base_url,
            1,
        )
        return url.replace("pulls", "pull", 1)

    def resolve_all(
        self,
        client: SubjectLookup,
        notifications: Sequence[GitHubNotification],
    ) -> List[FeedItem]:
        """
        全通知を並列に解決し、通知と同じ順序の FeedItem リストを返す。
        """
        if not notifications:
            return []

        slots: List[Optional[FeedItem]] = [None] * len(notifications)
        workers = self._max_workers or len(notifications)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="url-resolver") as executor:
            futures = [
                executor.submit(self._resolve_one, client, notification, slots, index)
                for index, notification in enumerate(notifications)
            ]
            wait(futures)

        for index, future in enumerate(futures):
            exc = future.exception()
            if exc is not None:
                logger.error(
                    "unexpected error while resolving notification id=%s: %s",
                    notifications[index].id,
                    exc,
                )

        items: List[FeedItem] = []
        for index, item in enumerate(slots):
            if item is None:
                raise RuntimeError(
                    f"notification id={notifications[index].id} produced no feed item"
                )
            items.append(item)

        return items

    def _resolve_one(
        self,
        client: SubjectLookup,
        notification: GitHubNotification,
        slots: List[Optional[FeedItem]],
        index: int,
    ) -> None:
        """
        1 件分の解決処理。slots[index] にだけ書き込む。
        """
        title = build_title(notification)
        subject_url = notification.subject.url or ""

        # 解決に失敗しても結果が残るよう、まずデフォルトの URL で埋めておく
        item = FeedItem(
            id=notification.id,
            url=self.default_url(subject_url),
            title=title,
            content_text=title,
            date_published=format_rfc3339(notification.updated_at),
        )
        slots[index] = item

        # サブジェクト URL が無い通知はリポジトリ URL で代用する
        if not subject_url:
            slots[index] = item.model_copy(update={"url": notification.repository.html_url})
            logger.warning(
                "[%s] %r: missing URL",
                notification.repository.full_name,
                notification.subject.title,
            )
            return

        # パブリックリポジトリなら本物の URL が取れる
        try:
            html_url = client.get_subject_html_url(subject_url)
        except GitHubClientError as exc:
            logger.error("error on subject URL resolution for %s: %s", subject_url, exc)
            return

        slots[index] = item.model_copy(update={"url": html_url})
