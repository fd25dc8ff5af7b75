# backend/notifeed/feed/config.py

"""
フィード生成・キャッシュに関する設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import HttpUrl, TypeAdapter, ValidationError

from notifeed.utils.config import InvalidSettingError, get_env, get_env_int

_HTTP_URL = TypeAdapter(HttpUrl)


@dataclass(frozen=True)
class FeedSettings:
    """
    フィード配信に関する設定値のまとまり。

    - feed_url: フィード自身の URL（JSON Feed の feed_url に入る）
    - cache_enabled: False の場合はリクエストごとに毎回 GitHub から取り直す
    """

    feed_url: str
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300
    cache_cleanup_interval_seconds: int = 600


def _validate_feed_url(raw: str) -> str:
    """
    FEED_URL が http(s) の絶対 URL であることを確認する。
    値自体は正規化せず、そのまま返す。
    """
    try:
        _HTTP_URL.validate_python(raw)
    except ValidationError as exc:
        raise InvalidSettingError("FEED_URL", raw, "not an absolute http(s) URL") from exc
    return raw


@lru_cache()
def get_feed_settings() -> FeedSettings:
    """
    環境変数からフィード設定を読み込む。

    必須:
      - FEED_URL

    任意:
      - NO_CACHE                            ("1" でキャッシュ無効)
      - FEED_CACHE_TTL_SECONDS              (デフォルト: 300 = 5分)
      - FEED_CACHE_CLEANUP_INTERVAL_SECONDS (デフォルト: 600 = 10分)
    """
    feed_url = _validate_feed_url(get_env("FEED_URL"))
    cache_enabled = get_env("NO_CACHE", required=False) != "1"

    ttl = get_env_int("FEED_CACHE_TTL_SECONDS", default=300)
    if ttl <= 0:
        raise InvalidSettingError("FEED_CACHE_TTL_SECONDS", str(ttl), "must be positive")

    cleanup_interval = get_env_int("FEED_CACHE_CLEANUP_INTERVAL_SECONDS", default=600)
    if cleanup_interval <= 0:
        raise InvalidSettingError(
            "FEED_CACHE_CLEANUP_INTERVAL_SECONDS", str(cleanup_interval), "must be positive"
        )

    return FeedSettings(
        feed_url=feed_url,
        cache_enabled=cache_enabled,
        cache_ttl_seconds=ttl,
        cache_cleanup_interval_seconds=cleanup_interval,
    )
