# backend/notifeed/utils/__init__.py

"""
共通ユーティリティ（環境変数の読み取り・ログ設定）。
"""
