# backend/notifeed/server.py

"""
uvicorn でアプリケーションを起動するランナー。

`python -m notifeed` または `notifeed` コマンドから呼ばれる。
SIGINT / SIGTERM での graceful shutdown は uvicorn に任せる。
"""

import ipaddress
import logging
from dataclasses import dataclass

import uvicorn

from notifeed.feed.config import get_feed_settings
from notifeed.utils.config import InvalidSettingError, get_env, get_env_int
from notifeed.utils.log_config import configure_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerSettings:
    """待ち受けアドレス・ポート。"""

    listen_addr: str = "127.0.0.1"
    port: int = 8080


def get_server_settings() -> ServerSettings:
    """
    環境変数からサーバ設定を読み込む。

    任意:
      - LISTEN_ADDR (デフォルト: 127.0.0.1, IP アドレスであること)
      - PORT        (デフォルト: 8080, 整数であること)
    """
    listen_addr = get_env("LISTEN_ADDR", default="127.0.0.1", required=False)
    try:
        ipaddress.ip_address(listen_addr)
    except ValueError as exc:
        raise InvalidSettingError("LISTEN_ADDR", listen_addr, "not an IP address") from exc

    port = get_env_int("PORT", default=8080)
    if not 0 < port < 65536:
        raise InvalidSettingError("PORT", str(port), "out of range")

    return ServerSettings(listen_addr=listen_addr, port=port)


def run() -> None:
    """
    設定を検証してから uvicorn を起動する。
    必須設定（FEED_URL）が不正な場合は起動前に例外で終了する。
    """
    configure_logging()
    settings = get_server_settings()
    get_feed_settings()

    logger.info("Listening on %s:%d", settings.listen_addr, settings.port)
    uvicorn.run(
        "notifeed.main:app",
        host=settings.listen_addr,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=5,
    )
