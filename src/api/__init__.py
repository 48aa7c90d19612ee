"""
どこで: `api` 入口（高レベル公開 API）。
何を: フレームドライバ（`PaperFoldApp`/`advance`）・ランナー（`launch`/`main`）・`shape` 装飾子を再輸出。
なぜ: 利用者が単一名前空間からアプリ定義→起動まで完結できるようにするため。

Usage:
    from api import PaperFoldApp, launch

    launch(PaperFoldApp, headless=True, config={"app": {"depth": 12}})
"""

from engine.core.geometry import MeshData
from shapes.registry import shape as shape

from .app import App, AppConfig, Binding, PaperFoldApp, advance, frame_transform
from .runner import launch, main

__all__ = [
    "App",
    "AppConfig",
    "Binding",
    "PaperFoldApp",
    "advance",
    "frame_transform",
    "launch",
    "main",
    "shape",
    "MeshData",
]

__version__ = "2026.10"
