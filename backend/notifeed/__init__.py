# backend/notifeed/__init__.py
"""
GitHub 通知を JSON Feed として配信するバックエンドパッケージ。

This package contains:
- main: FastAPI application entrypoint
- server: uvicorn ランナー
- github: GitHub API クライアント
- feed: 通知 → フィード変換パイプライン（URL 解決・組み立て・キャッシュ）
"""

__version__ = "1.0.0"
