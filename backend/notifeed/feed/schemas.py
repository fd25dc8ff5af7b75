# backend/notifeed/feed/schemas.py

"""
JSON Feed 1.1 のスキーマ定義。
https://jsonfeed.org/version/1.1

キャッシュから返したフィードを複数リクエストで共有するため、
モデルは frozen にしている。
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"
JSON_FEED_MEDIA_TYPE = "application/feed+json"


class Author(BaseModel):
    """フィードの作者情報。"""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    url: Optional[str] = None
    avatar: Optional[str] = None


class FeedItem(BaseModel):
    """
    フィードの 1 エントリ。GitHub 通知 1 件に対応する。
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="GitHub の通知スレッド ID")
    url: str = Field(..., description="通知対象のブラウザ向け URL")
    title: str = Field(..., description="[種別] owner/repo - タイトル")
    content_text: Optional[str] = None
    date_published: Optional[str] = Field(None, description="RFC3339 形式の更新日時")


class JSONFeed(BaseModel):
    """
    フィード全体（エンベロープ + items）。
    """

    model_config = ConfigDict(frozen=True)

    version: str = JSON_FEED_VERSION
    title: str
    home_page_url: str
    feed_url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    favicon: Optional[str] = None
    authors: List[Author] = Field(default_factory=list)
    language: Optional[str] = None
    expired: bool = False
    items: List[FeedItem] = Field(default_factory=list)

    def to_json(self) -> str:
        """
        ワイヤーフォーマット（未設定の任意フィールドは出力しない）で JSON 化する。
        """
        return self.model_dump_json(exclude_none=True)
