"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"

    # Headless 実行
    HEADLESS_FRAMES: int | None = None  # None なら設定ファイル値

    # GL backend
    GL_DEBUG: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - フレーム数は 0 未満を 0 に丸める。
    """
    _settings.LOG_LEVEL = env_str("PFD_LOG_LEVEL", "INFO").upper()
    _settings.HEADLESS_FRAMES = env_int("PFD_HEADLESS_FRAMES", None, min_value=0)
    _settings.GL_DEBUG = env_bool("PFD_GL_DEBUG", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
