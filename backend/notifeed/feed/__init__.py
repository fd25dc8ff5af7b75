# backend/notifeed/feed/__init__.py

"""
GitHub 通知 → JSON Feed 変換パイプライン。

- config: FEED_URL やキャッシュ設定
- schemas: JSON Feed 1.1 のモデル
- resolver: 通知ごとのブラウザ URL 解決（並列）
- assembler: 並べ替えとエンベロープ化
- cache: トークン単位の TTL キャッシュ
- service: パイプライン本体
- router: GET /feed
"""

from .config import FeedSettings, get_feed_settings  # noqa: F401
from .schemas import FeedItem, JSONFeed  # noqa: F401
from .service import FeedService  # noqa: F401
