# backend/notifeed/github/__init__.py

"""
GitHub API 連携モジュール。

- config: GitHub API の設定値（ベース URL, タイムアウト, 取得件数）
- schemas: 通知 API / サブジェクト API のレスポンスモデル
- client: アクセストークンを包んだ GitHub API クライアント
"""

from .client import (  # noqa: F401
    GitHubAPIError,
    GitHubClient,
    GitHubClientError,
    SubjectResolutionError,
)
from .config import GitHubSettings, get_github_settings  # noqa: F401
from .schemas import GitHubNotification, SubjectResource  # noqa: F401
