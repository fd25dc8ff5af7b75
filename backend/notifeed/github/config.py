# backend/notifeed/github/config.py

"""
GitHub API 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from notifeed.utils.config import InvalidSettingError, get_env, get_env_float, get_env_int

# GitHub の通知 API が受け付ける per_page の上限
MAX_NOTIFICATIONS_PER_PAGE = 50


@dataclass(frozen=True)
class GitHubSettings:
    """GitHub API 用の設定値コンテナ。"""

    api_base_url: str = "https://api.github.com"
    web_base_url: str = "https://github.com"
    api_version: str = "2022-11-28"
    timeout_seconds: float = 10.0
    notifications_per_page: int = 20


@lru_cache()
def get_github_settings() -> GitHubSettings:
    """
    環境変数から GitHub 設定を読み込む。

    任意:
      - GITHUB_API_BASE_URL            (デフォルト: https://api.github.com)
      - GITHUB_WEB_BASE_URL            (デフォルト: https://github.com)
      - GITHUB_TIMEOUT_SECONDS         (デフォルト: 10)
      - GITHUB_NOTIFICATIONS_PER_PAGE  (デフォルト: 20, 1〜50)
    """
    api_base_url = get_env(
        "GITHUB_API_BASE_URL",
        default="https://api.github.com",
        required=False,
    )
    web_base_url = get_env(
        "GITHUB_WEB_BASE_URL",
        default="https://github.com",
        required=False,
    )

    per_page = get_env_int("GITHUB_NOTIFICATIONS_PER_PAGE", default=20)
    if not 1 <= per_page <= MAX_NOTIFICATIONS_PER_PAGE:
        raise InvalidSettingError(
            "GITHUB_NOTIFICATIONS_PER_PAGE",
            str(per_page),
            f"must be between 1 and {MAX_NOTIFICATIONS_PER_PAGE}",
        )

    return GitHubSettings(
        api_base_url=api_base_url.rstrip("/"),
        web_base_url=web_base_url.rstrip("/"),
        timeout_seconds=get_env_float("GITHUB_TIMEOUT_SECONDS", default=10.0),
        notifications_per_page=per_page,
    )
