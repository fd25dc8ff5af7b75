# backend/notifeed/utils/config.py

"""
環境変数読み取り用のユーティリティ。
GitHub / Feed / Server の各設定モジュールから共通利用する。
"""

import os
from typing import Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


class InvalidSettingError(RuntimeError):
    """環境変数の値が不正な場合に投げる例外。"""

    def __init__(self, name: str, value: str, reason: str = "") -> None:
        message = f"Invalid value for env var {name}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.name = name
        self.value = value


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_int(name: str, default: int) -> int:
    """
    整数値の環境変数を取得するヘルパー。

    未設定ならデフォルト値、不正な値なら InvalidSettingError。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidSettingError(name, raw, "not an integer") from exc


def get_env_float(name: str, default: float) -> float:
    """
    数値（float）の環境変数を取得するヘルパー。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidSettingError(name, raw, "not a number") from exc
