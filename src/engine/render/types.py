"""
どこで: `engine.render` 型定義。
何を: 描画モード `DrawMode` と、登録済みリソースを指す不透明ハンドル型。
なぜ: アプリ側がバックエンド実装（GL/ヘッドレス）に依存せずにリソースを参照できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DrawMode(Enum):
    """index 列の解釈方法。"""

    POINTS = "points"
    LINES = "lines"  # 連続 2 index で 1 線分
    LINE_STRIP = "line_strip"
    TRIANGLES = "triangles"  # 連続 3 index で 1 三角形


@dataclass(frozen=True)
class MaterialHandle:
    """`register_material` が返す不透明ハンドル。"""

    id: int


@dataclass(frozen=True)
class MeshHandle:
    """`register_mesh` が返す不透明ハンドル。"""

    id: int


__all__ = ["DrawMode", "MaterialHandle", "MeshHandle"]
