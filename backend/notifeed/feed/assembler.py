# backend/notifeed/feed/assembler.py

"""
FeedItem のリストを並べ替え、JSON Feed のエンベロープに包むモジュール。
I/O は行わない。
"""

from datetime import datetime, timezone
from typing import Iterable, List

from .schemas import Author, FeedItem, JSONFeed

FEED_TITLE = "Github Notifications"
FEED_HOME_PAGE_URL = "https://github.com/notifications"
FEED_DESCRIPTION = "Your Github notifications"
FEED_ICON = "https://www.iconfinder.com/data/icons/octicons/1024/mark-github-512.png"
FEED_FAVICON = "https://github.com/favicon.ico"
FEED_LANGUAGE = "en-US"

FEED_AUTHORS = (
    Author(
        name="Quentin Lemaire",
        url="https://lemairepro.fr",
        avatar="https://gravatar.com/avatar/ae3ee0665731b1010ed57bd608ac213b?s=400&d=robohash&r=x",
    ),
    Author(
        name="Github",
        url="https://github.com",
        avatar="https://cdn4.iconfinder.com/data/icons/octicons/1024/mark-github-512.png",
    ),
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _published_at(item: FeedItem) -> datetime:
    """
    並べ替え用に date_published をパースする。
    未設定・パース不能なものは最も古い扱いにする。
    """
    if not item.date_published:
        return _EPOCH

    try:
        value = datetime.fromisoformat(item.date_published.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def sort_items(items: Iterable[FeedItem]) -> List[FeedItem]:
    """
    date_published の新しい順に並べる。
    同時刻のものは元の順序（通知 API の並び）を保つ安定ソート。
    """
    return sorted(items, key=_published_at, reverse=True)


class FeedAssembler:
    """
    解決済み FeedItem から JSONFeed を組み立てる。

    feed_url だけが環境ごとに異なり、それ以外のメタデータは固定値。
    """

    def __init__(self, feed_url: str) -> None:
        self._feed_url = feed_url

    def assemble(self, items: Iterable[FeedItem]) -> JSONFeed:
        return JSONFeed(
            title=FEED_TITLE,
            home_page_url=FEED_HOME_PAGE_URL,
            feed_url=self._feed_url,
            description=FEED_DESCRIPTION,
            icon=FEED_ICON,
            favicon=FEED_FAVICON,
            authors=list(FEED_AUTHORS),
            language=FEED_LANGUAGE,
            expired=False,
            items=sort_items(items),
        )
