# backend/notifeed/github/client.py

"""
GitHub API との通信を担当するクライアントモジュール。

呼び出し元から渡されたアクセストークンを包んだ httpx セッションを持ち、
- 通知一覧の取得
- サブジェクト（Issue / PR など）の html_url 取得
を提供する。
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from notifeed import __version__

from .config import GitHubSettings, get_github_settings
from .schemas import GitHubNotification, SubjectResource

logger = logging.getLogger(__name__)


class GitHubClientError(Exception):
    """GitHub クライアント全般の基底例外。"""


class GitHubAPIError(GitHubClientError):
    """
    GitHub API 呼び出しが失敗した場合の例外。

    status_code / message は上流のものをそのまま保持し、
    HTTP エントリポイントでクライアントへ転送する。
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"GitHub API error: status_code={status_code} {message}")
        self.status_code = status_code
        self.message = message


class SubjectResolutionError(GitHubClientError):
    """サブジェクトの html_url を解決できなかった場合の例外。"""


def _error_details(response: httpx.Response) -> List[str]:
    """
    GitHub のエラーレスポンス（{"message": ..., "errors": [{"message": ...}]}）から
    メッセージを抽出する。JSON でない場合は空リスト。
    """
    try:
        body = response.json()
    except ValueError:
        return []

    if not isinstance(body, dict):
        return []

    details: List[str] = []
    message = body.get("message")
    if isinstance(message, str) and message:
        details.append(message)

    errors = body.get("errors")
    if isinstance(errors, list):
        for error in errors:
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                details.append(error["message"])

    return details


class GitHubClient:
    """
    アクセストークン 1 つ分の認証済み GitHub API クライアント。

    - 生成時にネットワークアクセスは行わない（トークンの有効性は最初の API 呼び出しで判明する）
    - httpx.Client はスレッドセーフなので、URL 解決の並列タスクから共有して使う
    - with 文で使い、パイプライン 1 回分が終わったら close する
    """

    def __init__(
        self,
        token: str,
        settings: Optional[GitHubSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token must not be empty.")

        self._settings = settings or get_github_settings()
        self._http = httpx.Client(
            headers=self._build_headers(token),
            timeout=self._settings.timeout_seconds,
            # リポジトリのリネーム・移管時は 301 が返るので追従する
            follow_redirects=True,
            transport=transport,
        )

    @property
    def settings(self) -> GitHubSettings:
        return self._settings

    def _build_headers(self, token: str) -> Dict[str, str]:
        """
        GitHub API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self._settings.api_version,
            "User-Agent": f"notifeed/{__version__}",
        }

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """
        GET を実行し、接続エラーとエラーステータスを GitHubAPIError に変換する。
        """
        logger.debug("URL being requested: %s", url)
        try:
            response = self._http.get(url, params=params)
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise GitHubAPIError(
                status_code=502,
                message=f"Bad Gateway: fail to execute GitHub request: {exc}",
            ) from exc

        if response.status_code >= 400:
            status_line = f"{response.status_code} {response.reason_phrase}".strip()
            details = _error_details(response)
            message = ", ".join([status_line, *details])
            raise GitHubAPIError(status_code=response.status_code, message=message)

        return response

    def list_notifications(self) -> List[GitHubNotification]:
        """
        認証ユーザーの通知を 1 ページ分だけ取得する。

        :raises GitHubAPIError: 通信失敗・エラーステータス・想定外のレスポンス形式の場合
        :return: 上流の並び順のままの通知リスト
        """
        url = f"{self._settings.api_base_url}/notifications"
        params = {
            "all": "true",
            "per_page": self._settings.notifications_per_page,
        }

        response = self._get(url, params=params)

        try:
            data = response.json()
        except ValueError as exc:
            raise GitHubAPIError(
                status_code=502,
                message="Bad Gateway: notifications response is not valid JSON",
            ) from exc

        if not isinstance(data, list):
            raise GitHubAPIError(
                status_code=502,
                message="Bad Gateway: unexpected notifications response format",
            )

        try:
            return [GitHubNotification.model_validate(entry) for entry in data]
        except ValidationError as exc:
            raise GitHubAPIError(
                status_code=502,
                message=f"Bad Gateway: invalid notification payload: {exc.error_count()} error(s)",
            ) from exc

    def get_subject_html_url(self, subject_url: str) -> str:
        """
        サブジェクトの API URL を GET し、ブラウザ向けの html_url を返す。

        :raises GitHubAPIError: 通信失敗・エラーステータスの場合
        :raises SubjectResolutionError: JSON でない / html_url が無い場合
        """
        response = self._get(subject_url)

        try:
            resource = SubjectResource.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SubjectResolutionError(
                f"fail to decode subject response from {subject_url}: {exc}"
            ) from exc

        if not resource.html_url:
            raise SubjectResolutionError(f"html_url is missing in {subject_url}")

        return resource.html_url
