# backend/notifeed/feed/router.py

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from notifeed.github.client import GitHubAPIError

from .config import get_feed_settings
from .schemas import JSON_FEED_MEDIA_TYPE
from .service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])


@lru_cache()
def get_feed_service() -> FeedService:
    """
    FeedService のシングルトンインスタンスを取得する。

    NOTE:
      - テストでは app.dependency_overrides で差し替える前提。
      - FEED_URL が未設定 / 不正な場合はここで例外になる。
    """
    return FeedService(get_feed_settings())


@router.get(
    "/feed",
    summary="GitHub 通知を JSON Feed で取得",
    response_class=Response,
    responses={200: {"content": {JSON_FEED_MEDIA_TYPE: {}}}},
)
def get_github_notifications_feed(
    token: str = Query("", description="GitHub のアクセストークン"),
    service: FeedService = Depends(get_feed_service),
) -> Response:
    """
    クエリパラメータのトークンで GitHub 通知を取得し、JSON Feed として返すエンドポイント。

    - トークン無し → 403 Forbidden（GitHub へは一切アクセスしない）
    - 通知一覧の取得失敗 → GitHub のステータスコードとメッセージをそのまま返す
    - シリアライズ失敗 → 500 Internal Server Error
    """
    logger.info("Read Github user token from request")
    if not token:
        logger.warning("Token not found, aborting")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    try:
        feed = service.get_feed(token)
    except GitHubAPIError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    try:
        body = feed.to_json()
    except ValueError as exc:
        logger.error("fail to json encode feed, aborting: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while encoding the feed.",
        ) from exc

    return Response(
        content=body,
        media_type=JSON_FEED_MEDIA_TYPE,
        headers={"Cache-Control": f"max-age={int(service.cache.ttl_seconds)}"},
    )
