# backend/notifeed/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /feed エンドポイントを公開する（GitHub 通知の JSON Feed）
- /ping エンドポイントを公開する（死活監視）
- 起動時にキャッシュ掃除スレッドを開始し、終了時に止める
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from notifeed import __version__
from notifeed.feed.router import get_feed_service
from notifeed.feed.router import router as feed_router
from notifeed.utils.log_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    起動時に設定を検証し（FEED_URL 不正ならここで落ちる）、キャッシュ掃除を開始する。
    """
    configure_logging()
    service = app.dependency_overrides.get(get_feed_service, get_feed_service)()
    service.cache.start()
    logger.info("notifeed %s started", __version__)
    try:
        yield
    finally:
        service.cache.stop()
        logger.info("shutting down gracefully")


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - GitHub 通知フィード (/feed)
    - ヘルスチェックエンドポイント (/ping)
    """
    app = FastAPI(title="GitHub Notifications Feed", version=__version__, lifespan=lifespan)

    # ルーター登録
    app.include_router(feed_router)

    @app.get("/ping", tags=["health"], response_class=PlainTextResponse)
    def ping() -> str:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return "OK"

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
