# backend/tests/test_github_client.py

import httpx
import pytest

from notifeed.github.client import (
    GitHubAPIError,
    GitHubClient,
    GitHubClientError,
    SubjectResolutionError,
)
from notifeed.github.config import GitHubSettings

SETTINGS = GitHubSettings()


def _notification_payload(notification_id: str = "1") -> dict:
    return {
        "id": notification_id,
        "unread": True,
        "reason": "review_requested",
        "subject": {
            "type": "PullRequest",
            "title": "Fix typo",
            "url": "https://api.github.com/repos/octo/repo/pulls/42",
        },
        "repository": {
            "full_name": "octo/repo",
            "html_url": "https://github.com/octo/repo",
        },
        "updated_at": "2024-01-02T03:04:05Z",
    }


def _client(handler) -> GitHubClient:
    return GitHubClient("dummy-token", SETTINGS, transport=httpx.MockTransport(handler))


def test_github_api_error_is_client_error():
    """
    GitHubAPIError / SubjectResolutionError が GitHubClientError のサブクラスであることを確認する。
    """
    assert issubclass(GitHubAPIError, GitHubClientError)
    assert issubclass(SubjectResolutionError, GitHubClientError)


def test_empty_token_is_rejected():
    with pytest.raises(ValueError):
        GitHubClient("", SETTINGS)


def test_list_notifications_success():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[_notification_payload("1"), _notification_payload("2")])

    with _client(handler) as client:
        notifications = client.list_notifications()

    assert [n.id for n in notifications] == ["1", "2"]
    assert notifications[0].subject.type == "PullRequest"
    assert notifications[0].repository.full_name == "octo/repo"

    # 1 ページ分だけ、all=true / per_page=20 で取得する
    assert len(requests) == 1
    request = requests[0]
    assert request.url.path == "/notifications"
    assert request.url.params["all"] == "true"
    assert request.url.params["per_page"] == "20"
    assert request.headers["Authorization"] == "Bearer dummy-token"
    assert request.headers["Accept"] == "application/vnd.github+json"


def test_list_notifications_accepts_null_subject_url():
    payload = _notification_payload()
    payload["subject"]["url"] = None

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[payload])

    with _client(handler) as client:
        notifications = client.list_notifications()

    assert notifications[0].subject.url is None


def test_list_notifications_401_forwards_status_and_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={
                "message": "Bad credentials",
                "documentation_url": "https://docs.github.com/rest",
            },
        )

    with _client(handler) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.list_notifications()

    assert excinfo.value.status_code == 401
    assert excinfo.value.message.startswith("401 Unauthorized")
    assert "Bad credentials" in excinfo.value.message


def test_list_notifications_includes_github_error_details():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={
                "message": "Validation Failed",
                "errors": [{"message": "per_page is invalid"}],
            },
        )

    with _client(handler) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.list_notifications()

    assert excinfo.value.status_code == 422
    assert "Validation Failed" in excinfo.value.message
    assert "per_page is invalid" in excinfo.value.message


def test_list_notifications_network_error_is_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network error", request=request)

    with _client(handler) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.list_notifications()

    assert excinfo.value.status_code == 502


def test_list_notifications_unexpected_format_is_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"not": "a list"})

    with _client(handler) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.list_notifications()

    assert excinfo.value.status_code == 502


def test_get_subject_html_url_success():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://api.github.com/repos/octo/repo/pulls/42"
        return httpx.Response(
            200,
            json={"id": 42, "html_url": "https://github.com/octo/repo/pull/42"},
        )

    with _client(handler) as client:
        url = client.get_subject_html_url("https://api.github.com/repos/octo/repo/pulls/42")

    assert url == "https://github.com/octo/repo/pull/42"


def test_get_subject_html_url_missing_field():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 42})

    with _client(handler) as client:
        with pytest.raises(SubjectResolutionError):
            client.get_subject_html_url("https://api.github.com/repos/octo/repo/issues/42")


def test_get_subject_html_url_not_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html></html>")

    with _client(handler) as client:
        with pytest.raises(SubjectResolutionError):
            client.get_subject_html_url("https://api.github.com/repos/octo/repo/issues/42")


def test_get_subject_html_url_404():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    with _client(handler) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.get_subject_html_url("https://api.github.com/repos/octo/private/issues/1")

    assert excinfo.value.status_code == 404


def test_get_subject_html_url_follows_redirect_of_renamed_repository():
    """
    リネーム / 移管されたリポジトリのサブジェクトは 301 の移動先から html_url を取得する。
    """
    old_url = "https://api.github.com/repos/octo/old-name/issues/1"
    new_url = "https://api.github.com/repositories/123/issues/1"

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == old_url:
            return httpx.Response(301, headers={"Location": new_url})
        assert str(request.url) == new_url
        assert request.headers["Authorization"] == "Bearer dummy-token"
        return httpx.Response(200, json={"html_url": "https://github.com/octo/new-name/issues/1"})

    with _client(handler) as client:
        url = client.get_subject_html_url(old_url)

    assert url == "https://github.com/octo/new-name/issues/1"


def test_list_notifications_follows_redirect():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/notifications":
            return httpx.Response(
                307,
                headers={"Location": "https://api.github.com/v2/notifications?all=true&per_page=20"},
            )
        return httpx.Response(200, json=[_notification_payload("1")])

    with _client(handler) as client:
        notifications = client.list_notifications()

    assert [n.id for n in notifications] == ["1"]
