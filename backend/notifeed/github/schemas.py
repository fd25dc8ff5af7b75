# backend/notifeed/github/schemas.py

"""
GitHub API から取得したデータを内部で扱うためのスキーマ定義。

必要なフィールドだけを定義し、それ以外のフィールドは無視する。
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NotificationSubject(BaseModel):
    """通知の対象（Issue / PullRequest / Commit など）。"""

    model_config = ConfigDict(frozen=True)

    type: str = Field("", description="サブジェクト種別: Issue / PullRequest / Release など")
    title: str = Field("", description="サブジェクトのタイトル")
    url: Optional[str] = Field(
        None,
        description="サブジェクトの API URL。リポジトリ単位のイベントなどでは空",
    )


class NotificationRepository(BaseModel):
    """通知が属するリポジトリ。"""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field("", description="owner/name 形式のリポジトリ名")
    html_url: str = Field("", description="リポジトリのブラウザ向け URL")


class GitHubNotification(BaseModel):
    """
    GET /notifications の 1 要素を表現するモデル。
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="通知スレッド ID")
    subject: NotificationSubject = Field(default_factory=NotificationSubject)
    repository: NotificationRepository = Field(default_factory=NotificationRepository)
    updated_at: datetime = Field(..., description="最終更新日時")


class SubjectResource(BaseModel):
    """
    サブジェクト API（Issue / PR など）のレスポンスのうち html_url だけを読むモデル。

    html_url が無い / null の場合は「解決失敗」として扱う。
    """

    html_url: Optional[str] = None
