# backend/notifeed/utils/log_config.py

"""
アプリ全体のログ設定。

各モジュールは logging.getLogger(__name__) を使うだけにして、
ハンドラやレベルの設定はプロセス起動時にここで一度だけ行う。
"""

import logging
from typing import Optional

from .config import get_env

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_HANDLER_NAME = "notifeed"


def configure_logging(level: Optional[str] = None) -> None:
    """
    ルートロガーにストリームハンドラを 1 つだけ登録する。

    :param level: ログレベル名。None の場合は $LOG_LEVEL（デフォルト DEBUG）
    """
    level_name = (level or get_env("LOG_LEVEL", default="DEBUG", required=False)).upper()

    root = logging.getLogger()
    root.setLevel(level_name)

    # 二重登録しない（uvicorn の reload やテストで複数回呼ばれても良いように）
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # httpx のリクエストログは DEBUG 運用時にうるさいので WARNING 以上に絞る
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
